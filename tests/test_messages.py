from conftest import request_board


def test_messages_visible_to_both_participants(owner_client, renter_client, owner, renter, board):
    rental = request_board(renter_client, board["id"])
    url = f"/api/v1/rentals/{rental['id']}/messages"

    resp = renter_client.post(url, json={"message": "  Is the board waxed?  "})
    assert resp.status_code == 201
    first = resp.get_json()
    assert first["message"] == "Is the board waxed?"
    assert first["sender_id"] == renter["id"]
    assert first["is_mine"] is True

    resp = owner_client.post(url, json={"message": "Yes, fresh wax."})
    assert resp.status_code == 201

    owner_view = owner_client.get(url).get_json()
    assert owner_view["poll_interval"] == 3
    assert [row["message"] for row in owner_view["items"]] == ["Is the board waxed?", "Yes, fresh wax."]
    assert [row["is_mine"] for row in owner_view["items"]] == [False, True]
    assert owner_view["items"][0]["sender_email"] == renter["email"]

    renter_view = renter_client.get(url).get_json()
    assert [row["id"] for row in renter_view["items"]] == [row["id"] for row in owner_view["items"]]
    assert [row["is_mine"] for row in renter_view["items"]] == [True, False]


def test_poll_after_id_returns_only_new_messages(owner_client, renter_client, board):
    rental = request_board(renter_client, board["id"])
    url = f"/api/v1/rentals/{rental['id']}/messages"
    first = renter_client.post(url, json={"message": "Hello"}).get_json()
    owner_client.post(url, json={"message": "Hi there"})

    newer = owner_client.get(f"{url}?after_id={first['id']}").get_json()["items"]
    assert [row["message"] for row in newer] == ["Hi there"]


def test_message_validation(renter_client, board):
    rental = request_board(renter_client, board["id"])
    url = f"/api/v1/rentals/{rental['id']}/messages"

    resp = renter_client.post(url, json={"message": "   "})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Message is required."

    resp = renter_client.post(url, json={"message": "x" * 2001})
    assert resp.status_code == 400


def test_outsider_cannot_read_or_post(app, renter_client, board):
    rental = request_board(renter_client, board["id"])
    url = f"/api/v1/rentals/{rental['id']}/messages"

    outsider = app.test_client()
    outsider.post("/api/v1/auth/register", json={"email": "outsider@example.com", "password": "surfsup123"})
    assert outsider.get(url).status_code == 403
    assert outsider.post(url, json={"message": "hey"}).status_code == 403
    assert outsider.get("/api/v1/rentals/999/messages").status_code == 404
