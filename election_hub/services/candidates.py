import logging
import re

from election_hub.errors import ConflictError, NotFoundError, ValidationError
from election_hub.extensions import db
from election_hub.models import Candidate, Vote
from election_hub.services.elections import commit_or_conflict
from election_hub.services.tally import get_election_or_404

log = logging.getLogger(__name__)

NUMBER_RE = re.compile(r"^[0-9]+$")
NAME_RE = re.compile(r"^[a-zA-Z\s&]+$")

DUPLICATE_NUMBER = "Candidate number already exists for this election"


def get_candidate_or_404(candidate_id):
    candidate = db.session.get(Candidate, candidate_id)
    if candidate is None:
        raise NotFoundError("Candidate not found")
    return candidate


def list_candidates(election_id=None):
    query = Candidate.query
    if election_id is not None:
        query = query.filter_by(election_id=election_id)
    return query.order_by(Candidate.id).all()


def _clean_fields(fields, partial=False):
    """Validate candidate input; with ``partial`` only the given keys are checked."""
    cleaned = {}

    if "number" in fields or not partial:
        number = str(fields.get("number") or "").strip()
        if not NUMBER_RE.match(number):
            raise ValidationError("number must contain digits only")
        cleaned["number"] = number

    if "name" in fields or not partial:
        name = str(fields.get("name") or "").strip()
        if not NAME_RE.match(name):
            raise ValidationError("name may only contain letters, spaces and '&'")
        cleaned["name"] = name

    for key in ("vision", "mission"):
        if key in fields or not partial:
            value = fields.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ValidationError(f"{key} is required")
            cleaned[key] = value.strip()

    if "image_url" in fields:
        image_url = fields.get("image_url")
        if image_url is not None and not isinstance(image_url, str):
            raise ValidationError("image_url must be a string")
        cleaned["image_url"] = image_url or None

    return cleaned


def _number_taken(election_id, number, exclude_id=None):
    query = Candidate.query.filter_by(election_id=election_id, number=number)
    if exclude_id is not None:
        query = query.filter(Candidate.id != exclude_id)
    return query.first() is not None


def create_candidate(election_id, **fields):
    if election_id is None:
        raise ValidationError("election_id is required")
    election = get_election_or_404(election_id)
    cleaned = _clean_fields(fields)

    if _number_taken(election.id, cleaned["number"]):
        raise ConflictError(DUPLICATE_NUMBER)

    candidate = Candidate(election_id=election.id, **cleaned)
    db.session.add(candidate)
    commit_or_conflict(DUPLICATE_NUMBER)

    log.info("Candidate %s (#%s) added to election %s", candidate.id, candidate.number, election.id)
    return candidate


def update_candidate(candidate_id, **fields):
    candidate = get_candidate_or_404(candidate_id)
    cleaned = _clean_fields(fields, partial=True)

    number = cleaned.get("number")
    if number is not None and number != candidate.number:
        if _number_taken(candidate.election_id, number, exclude_id=candidate.id):
            raise ConflictError(DUPLICATE_NUMBER)

    for key, value in cleaned.items():
        setattr(candidate, key, value)

    commit_or_conflict(DUPLICATE_NUMBER)
    return candidate


def delete_candidate(candidate_id):
    """Remove a candidate and its votes in one transaction."""
    candidate = get_candidate_or_404(candidate_id)

    removed = Vote.query.filter_by(candidate_id=candidate.id).count()
    try:
        db.session.delete(candidate)
        db.session.commit()
    except Exception:
        db.session.rollback()
        log.exception("Failed to delete candidate %s, rolled back", candidate_id)
        raise

    log.info("Candidate %s deleted with %d votes", candidate_id, removed)
    return removed
