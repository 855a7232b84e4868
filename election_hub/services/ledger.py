import hashlib
import hmac
import logging

from flask import current_app
from sqlalchemy.exc import IntegrityError

from election_hub.errors import ConflictError, InvalidStateError, NotFoundError
from election_hub.extensions import db
from election_hub.models import Candidate, Election, Vote
from election_hub.models.election import STATUS_ACTIVE, STATUS_CLOSED
from election_hub.services.status import resolve_status
from election_hub.services.tally import get_election_or_404, vote_counts_by_candidate

log = logging.getLogger(__name__)


def anonymize_number(number, secret=None):
    """One-way hash of a candidate number keyed with the server secret."""
    if secret is None:
        secret = current_app.config["SECRET_KEY"]
    return hmac.new(
        secret.encode("utf-8"), str(number).encode("utf-8"), hashlib.sha256
    ).hexdigest()


def find_vote(voter_id, election_id):
    return Vote.query.filter_by(user_id=voter_id, election_id=election_id).first()


def cast_vote(voter_id, candidate_id, today=None):
    candidate = db.session.get(Candidate, candidate_id)
    if candidate is None:
        raise NotFoundError("Candidate not found")

    election = db.session.get(Election, candidate.election_id)
    if election is None:
        raise NotFoundError("Election not found")

    if resolve_status(election.election_date, today=today) != STATUS_ACTIVE:
        raise InvalidStateError("Voting is only allowed for active elections")

    # Fast path for the common case; the unique constraint below is what
    # actually guards against two concurrent requests from the same voter.
    if find_vote(voter_id, election.id) is not None:
        raise ConflictError("You have already voted in this election")

    vote = Vote(user_id=voter_id, candidate_id=candidate.id, election_id=election.id)
    db.session.add(vote)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        log.warning(
            "Duplicate vote rejected by storage (user=%s, election=%s)",
            voter_id,
            election.id,
        )
        raise ConflictError("You have already voted in this election")

    log.info("Vote %s recorded (user=%s, election=%s)", vote.id, voter_id, election.id)
    return vote


def has_voted(voter_id, election_id):
    election = get_election_or_404(election_id)

    vote = find_vote(voter_id, election.id)
    if vote is None:
        return {"has_voted": False}

    candidate = vote.candidate
    return {
        "has_voted": True,
        "candidate": {
            "id": candidate.id,
            "name": candidate.name,
            "number": anonymize_number(candidate.number),
        },
    }


def tally_results(election_id, today=None):
    """
    Final results of a closed election, highest vote count first.

    Candidates with equal counts keep their creation order.
    """
    election = get_election_or_404(election_id)

    if resolve_status(election.election_date, today=today) != STATUS_CLOSED:
        raise InvalidStateError("Results are only available for closed elections")

    counts = vote_counts_by_candidate(election.id)
    total_votes = sum(counts.values())

    results = []
    for candidate in Candidate.query.filter_by(election_id=election.id).order_by(Candidate.id):
        vote_count = counts.get(candidate.id, 0)
        percentage = round(vote_count / total_votes * 100, 2) if total_votes > 0 else 0
        results.append({
            "candidate_id": candidate.id,
            "candidate_number": candidate.number,
            "candidate_name": candidate.name,
            "votes": vote_count,
            "percentage": percentage,
        })

    # sorted() is stable, so ties stay in candidate order
    results = sorted(results, key=lambda r: r["votes"], reverse=True)

    return {
        "election_id": election.id,
        "election_title": election.title,
        "total_votes": total_votes,
        "results": results,
    }
