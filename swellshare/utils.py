from urllib.parse import urlparse


def as_text(value):
    """Strip a form or JSON value; JSON clients may send numbers where forms send strings."""
    if value is None:
        return ""
    return str(value).strip()


def is_safe_redirect(target):
    """Only same-site paths; browsers read a leading "/\\" like "//"."""
    if not target or not target.startswith("/") or "\\" in target:
        return False
    if target.startswith("//"):
        return False
    parsed = urlparse(target)
    return not parsed.scheme and not parsed.netloc
