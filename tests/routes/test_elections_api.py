from datetime import date, timedelta

TODAY = date.today()


def test_list_elections_requires_login(client):
    response = client.get("/api/elections")
    assert response.status_code == 401
    assert response.get_json() == {"ok": False, "error": "Unauthenticated"}


def test_voter_cannot_create_election(voter_client):
    response = voter_client.post(
        "/api/elections", json={"title": "Senate", "election_date": TODAY.isoformat()}
    )
    assert response.status_code == 403


def test_create_and_show_election(auth_client):
    response = auth_client.post(
        "/api/elections", json={"title": "Senate", "election_date": TODAY.isoformat()}
    )
    assert response.status_code == 201
    payload = response.get_json()
    assert payload["ok"] is True
    assert payload["data"]["status"] == "active"
    assert payload["data"]["candidate_count"] == 0

    election_id = payload["data"]["id"]
    response = auth_client.get(f"/api/elections/{election_id}")
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["title"] == "Senate"
    assert data["election_date"] == TODAY.isoformat()
    assert data["election_date_display"] == TODAY.strftime("%A, %d %B %Y")
    assert data["candidates"] == []


def test_create_election_accepts_form_data(auth_client):
    response = auth_client.post(
        "/api/elections",
        data={"title": "Council", "election_date": (TODAY + timedelta(days=7)).isoformat()},
    )
    assert response.status_code == 201
    assert response.get_json()["data"]["status"] == "upcoming"


def test_duplicate_election_date_returns_409(auth_client, make_election):
    make_election(days_from_today=0)

    response = auth_client.post(
        "/api/elections", json={"title": "Again", "election_date": TODAY.isoformat()}
    )
    assert response.status_code == 409
    assert response.get_json() == {
        "ok": False,
        "error": "An election is already scheduled on this date",
    }


def test_invalid_election_date_returns_422(auth_client):
    response = auth_client.post(
        "/api/elections", json={"title": "Senate", "election_date": "tomorrow"}
    )
    assert response.status_code == 422
    assert response.get_json()["ok"] is False


def test_list_elections_recomputes_counts(auth_client, make_election, make_candidate):
    election = make_election(days_from_today=2)
    make_candidate(election, 1, "Alice")
    make_candidate(election, 2, "Bob")

    response = auth_client.get("/api/elections")

    assert response.status_code == 200
    (data,) = response.get_json()["data"]
    assert data["candidate_count"] == 2
    assert data["voter_count"] == 0
    assert data["status"] == "upcoming"


def test_update_election(auth_client, make_election):
    election = make_election(days_from_today=4)

    response = auth_client.post(
        f"/api/elections/{election.id}", json={"title": "Renamed"}
    )

    assert response.status_code == 200
    assert response.get_json()["data"]["title"] == "Renamed"


def test_unknown_election_returns_404(auth_client):
    response = auth_client.get("/api/elections/999")
    assert response.status_code == 404
    assert response.get_json() == {"ok": False, "error": "Election not found"}


def test_delete_election(auth_client, make_election, make_candidate):
    empty = make_election("Empty", days_from_today=1)
    busy = make_election("Busy", days_from_today=2)
    make_candidate(busy, 1, "Alice")

    assert auth_client.delete(f"/api/elections/{empty.id}").status_code == 200
    assert auth_client.delete(f"/api/elections/{busy.id}").status_code == 409


def test_current_election_is_public(client, make_election):
    assert client.get("/api/current-election").status_code == 404

    election = make_election(days_from_today=0)

    response = client.get("/api/current-election")
    assert response.status_code == 200
    data = response.get_json()["data"]
    assert data["id"] == election.id
    assert data["status"] == "active"
