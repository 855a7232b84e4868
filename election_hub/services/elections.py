import logging
from datetime import date

from sqlalchemy.exc import IntegrityError

from election_hub.errors import ConflictError, ValidationError
from election_hub.extensions import db
from election_hub.models import Candidate, Election, Vote
from election_hub.models.election import STATUS_ACTIVE
from election_hub.services.status import refresh_status
from election_hub.services.tally import election_counts, get_election_or_404, vote_counts_by_candidate

log = logging.getLogger(__name__)


def parse_election_date(value):
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise ValidationError("election_date is required")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError("election_date must be a date in YYYY-MM-DD format")


def clean_title(value):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("title is required")
    return value.strip()


def _ensure_date_free(election_date, exclude_id=None):
    query = Election.query.filter(Election.election_date == election_date)
    if exclude_id is not None:
        query = query.filter(Election.id != exclude_id)
    if query.first() is not None:
        raise ConflictError("An election is already scheduled on this date")


def _refresh(election, today=None):
    """Bring the derived status and counters of ``election`` up to date."""
    changed = refresh_status(election, today=today)
    election_counts(election)
    return changed


def list_elections(today=None):
    elections = Election.query.order_by(Election.election_date).all()
    for election in elections:
        _refresh(election, today=today)
    db.session.commit()
    return elections


def get_election(election_id, today=None):
    election = get_election_or_404(election_id)
    _refresh(election, today=today)
    db.session.commit()
    return election


def get_active_election(today=None):
    """The election running today, or None."""
    today = today or date.today()
    election = Election.query.filter_by(election_date=today).first()
    if election is None:
        return None
    _refresh(election, today=today)
    db.session.commit()
    return election if election.status == STATUS_ACTIVE else None


def election_detail(election):
    counts = vote_counts_by_candidate(election.id)
    data = election.to_dict()
    data["candidates"] = [
        {
            "id": candidate.id,
            "number": candidate.number,
            "name": candidate.name,
            "vote_count": counts.get(candidate.id, 0),
        }
        for candidate in election.candidates
    ]
    return data


def create_election(title, election_date, today=None):
    title = clean_title(title)
    election_date = parse_election_date(election_date)
    _ensure_date_free(election_date)

    election = Election(
        title=title,
        election_date=election_date,
        candidate_count=0,
        voter_count=0,
    )
    refresh_status(election, today=today)
    db.session.add(election)
    commit_or_conflict("An election is already scheduled on this date")

    log.info("Election %s created for %s", election.id, election.election_date)
    return election


def update_election(election_id, title=None, election_date=None, today=None):
    election = get_election_or_404(election_id)

    if title is not None:
        election.title = clean_title(title)

    if election_date is not None:
        election_date = parse_election_date(election_date)
        _ensure_date_free(election_date, exclude_id=election.id)
        election.election_date = election_date

    _refresh(election, today=today)
    commit_or_conflict("Another election is already scheduled for this date")
    return election


def delete_election(election_id):
    election = get_election_or_404(election_id)

    candidate_count = Candidate.query.filter_by(election_id=election.id).count()
    vote_count = Vote.query.filter_by(election_id=election.id).count()
    if candidate_count > 0 or vote_count > 0:
        raise ConflictError("Cannot delete election with associated candidates or votes")

    db.session.delete(election)
    db.session.commit()
    log.info("Election %s deleted", election_id)


def commit_or_conflict(message):
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise ConflictError(message)
