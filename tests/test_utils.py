import pytest

from swellshare.utils import as_text, is_safe_redirect


def test_as_text():
    assert as_text(None) == ""
    assert as_text("  Malibu ") == "Malibu"
    assert as_text(42) == "42"


@pytest.mark.parametrize(
    "target, expected",
    [
        ("/dashboard?requests=pending", True),
        ("/profile", True),
        ("", False),
        ("dashboard", False),
        ("//evil.example", False),
        ("/\\evil.example", False),
        ("https://evil.example/", False),
    ],
)
def test_is_safe_redirect(target, expected):
    assert is_safe_redirect(target) is expected
