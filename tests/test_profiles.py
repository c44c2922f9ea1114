def test_get_own_profile(owner_client, owner):
    resp = owner_client.get("/api/v1/profiles/me")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["id"] == owner["id"]
    assert data["full_name"] == "Olive Owner"


def test_update_profile_fields(owner_client):
    resp = owner_client.patch(
        "/api/v1/profiles/me",
        json={"full_name": "  Olive O.  ", "location": "Malibu, CA", "bio": "", "role": "admin"},
    )
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["full_name"] == "Olive O."
    assert data["location"] == "Malibu, CA"
    assert data["bio"] is None

    session = owner_client.get("/api/v1/auth/session").get_json()
    assert session["user"]["role"] == "user"


def test_update_profile_rejects_long_values(owner_client):
    resp = owner_client.patch("/api/v1/profiles/me", json={"phone": "5" * 40})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Phone is too long."
