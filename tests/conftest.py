from datetime import date, timedelta

import pytest

from election_hub import create_app
from election_hub.config import TestConfig
from election_hub.extensions import db
from election_hub.models import Candidate, Election, User
from election_hub.models.user import ROLE_ADMIN, ROLE_VOTER


@pytest.fixture(autouse=True)
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def db_session(app):
    return db.session


@pytest.fixture
def client(app):
    return app.test_client()


def make_user(db_session, name, role):
    user = User(name=name, email=f"{name.lower()}@example.com", role=role)
    db_session.add(user)
    db_session.commit()
    return user


@pytest.fixture
def admin_user(db_session):
    return make_user(db_session, "Admin", ROLE_ADMIN)


@pytest.fixture
def voter_user(db_session):
    return make_user(db_session, "Alice", ROLE_VOTER)


@pytest.fixture
def other_voter_user(db_session):
    return make_user(db_session, "Bob", ROLE_VOTER)


def login(client, user):
    with client.session_transaction() as sess:
        sess["user_id"] = user.id
    return client


@pytest.fixture
def auth_client(app, admin_user):
    return login(app.test_client(), admin_user)


@pytest.fixture
def voter_client(app, voter_user):
    return login(app.test_client(), voter_user)


@pytest.fixture
def make_election(db_session):
    def _make(title="Senate", days_from_today=0, status=None):
        election_date = date.today() + timedelta(days=days_from_today)
        election = Election(
            title=title,
            election_date=election_date,
            status=status or "upcoming",
        )
        db_session.add(election)
        db_session.commit()
        return election

    return _make


@pytest.fixture
def make_candidate(db_session):
    def _make(election, number, name, image_url=None):
        candidate = Candidate(
            election_id=election.id,
            number=str(number),
            name=name,
            vision=f"{name} vision",
            mission=f"{name} mission",
            image_url=image_url,
        )
        db_session.add(candidate)
        db_session.commit()
        return candidate

    return _make


@pytest.fixture
def make_voters(db_session):
    def _make(count):
        return [make_user(db_session, f"Voter{i}", ROLE_VOTER) for i in range(count)]

    return _make
