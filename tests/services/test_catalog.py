from datetime import date, timedelta

import pytest
from sqlalchemy import event
from sqlalchemy.orm import Session

from election_hub.errors import ConflictError, NotFoundError, ValidationError
from election_hub.models import Candidate, Election, Vote
from election_hub.services.candidates import create_candidate, delete_candidate, update_candidate
from election_hub.services.elections import (
    create_election,
    delete_election,
    get_active_election,
    get_election,
    update_election,
)

TODAY = date.today()


def _candidate_fields(number, name):
    return {"number": number, "name": name, "vision": "A vision", "mission": "A mission"}


def test_create_election_sets_status_from_date():
    assert create_election("Past", (TODAY - timedelta(days=2)).isoformat()).status == "closed"
    assert create_election("Now", TODAY.isoformat()).status == "active"
    assert create_election("Later", (TODAY + timedelta(days=2)).isoformat()).status == "upcoming"


def test_only_one_election_per_date():
    create_election("Senate", TODAY.isoformat())

    with pytest.raises(ConflictError):
        create_election("Council", TODAY.isoformat())


@pytest.mark.parametrize(
    "title, election_date",
    [("", "2026-10-19"), ("Senate", "19/10/2026"), ("Senate", None), (None, "2026-10-19")],
)
def test_create_election_validation(title, election_date):
    with pytest.raises(ValidationError):
        create_election(title, election_date)


def test_update_election_moves_date_and_status(make_election):
    election = make_election(days_from_today=3)
    make_election("Other", days_from_today=5)

    updated = update_election(election.id, election_date=TODAY.isoformat())
    assert updated.status == "active"

    with pytest.raises(ConflictError):
        update_election(election.id, election_date=(TODAY + timedelta(days=5)).isoformat())


def test_update_unknown_election():
    with pytest.raises(NotFoundError):
        update_election(10, title="Nope")


def test_get_election_refreshes_status_and_counts(db_session, make_election, make_candidate, voter_user):
    election = make_election(days_from_today=-1, status="active")
    alice = make_candidate(election, 1, "Alice")
    db_session.add(Vote(user_id=voter_user.id, candidate_id=alice.id, election_id=election.id))
    db_session.commit()

    election = get_election(election.id)

    assert election.status == "closed"
    assert election.candidate_count == 1
    assert election.voter_count == 1


def test_get_active_election(make_election):
    assert get_active_election() is None
    make_election("Tomorrow", days_from_today=1)
    today = make_election("Today", days_from_today=0)

    assert get_active_election().id == today.id


def test_delete_empty_election(db_session, make_election):
    election = make_election()
    election_id = election.id

    delete_election(election_id)

    assert db_session.get(Election, election_id) is None


def test_delete_election_with_candidates_conflicts(make_election, make_candidate):
    election = make_election()
    make_candidate(election, 1, "Alice")

    with pytest.raises(ConflictError):
        delete_election(election.id)
    assert Election.query.count() == 1


def test_candidate_number_unique_per_election(make_election):
    senate = make_election("Senate", days_from_today=0)
    council = make_election("Council", days_from_today=1)

    create_candidate(senate.id, **_candidate_fields("1", "Alice"))
    create_candidate(council.id, **_candidate_fields("1", "Alice"))

    with pytest.raises(ConflictError):
        create_candidate(senate.id, **_candidate_fields("1", "Bob"))


@pytest.mark.parametrize(
    "fields",
    [
        _candidate_fields("A1", "Alice"),
        _candidate_fields("1", "Alice 2"),
        {"number": "1", "name": "Alice", "vision": "", "mission": "m"},
        {"number": "1", "name": "Alice", "vision": "v"},
    ],
)
def test_create_candidate_validation(make_election, fields):
    election = make_election()

    with pytest.raises(ValidationError):
        create_candidate(election.id, **fields)


def test_create_candidate_for_unknown_election():
    with pytest.raises(NotFoundError):
        create_candidate(77, **_candidate_fields("1", "Alice"))


def test_update_candidate_number_conflict(make_election, make_candidate):
    election = make_election()
    make_candidate(election, 1, "Alice")
    bob = make_candidate(election, 2, "Bob")

    with pytest.raises(ConflictError):
        update_candidate(bob.id, number="1")

    updated = update_candidate(bob.id, number="2", name="Bob & Co")
    assert updated.name == "Bob & Co"


def test_delete_candidate_removes_only_its_votes(db_session, make_election, make_candidate, make_voters):
    election = make_election()
    alice = make_candidate(election, 1, "Alice")
    bob = make_candidate(election, 2, "Bob")
    voters = make_voters(3)
    db_session.add_all([
        Vote(user_id=voters[0].id, candidate_id=alice.id, election_id=election.id),
        Vote(user_id=voters[1].id, candidate_id=alice.id, election_id=election.id),
        Vote(user_id=voters[2].id, candidate_id=bob.id, election_id=election.id),
    ])
    db_session.commit()
    alice_id, bob_id = alice.id, bob.id

    assert delete_candidate(alice_id) == 2

    assert db_session.get(Candidate, alice_id) is None
    assert Vote.query.filter_by(candidate_id=alice_id).count() == 0
    assert Vote.query.filter_by(candidate_id=bob_id).count() == 1


def test_delete_candidate_rolls_back_on_failure(db_session, make_election, make_candidate, voter_user):
    election = make_election()
    alice = make_candidate(election, 1, "Alice")
    db_session.add(Vote(user_id=voter_user.id, candidate_id=alice.id, election_id=election.id))
    db_session.commit()
    alice_id = alice.id

    # fail after the DELETE statements have run, inside the same transaction
    def fail_after_flush(session, flush_context):
        raise RuntimeError("disk full")

    event.listen(Session, "after_flush", fail_after_flush)
    try:
        with pytest.raises(RuntimeError):
            delete_candidate(alice_id)
    finally:
        event.remove(Session, "after_flush", fail_after_flush)

    assert db_session.get(Candidate, alice_id) is not None
    assert Vote.query.filter_by(candidate_id=alice_id).count() == 1


def test_delete_unknown_candidate():
    with pytest.raises(NotFoundError):
        delete_candidate(5)
