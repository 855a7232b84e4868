from sqlalchemy import func

from election_hub.errors import NotFoundError
from election_hub.extensions import db
from election_hub.models import Candidate, Election, Vote


def get_election_or_404(election_id):
    election = db.session.get(Election, election_id)
    if election is None:
        raise NotFoundError("Election not found")
    return election


def count_voters(election_id):
    """Number of distinct voters among the election's votes."""
    return (
        db.session.query(func.count(func.distinct(Vote.user_id)))
        .filter(Vote.election_id == election_id)
        .scalar()
        or 0
    )


def count_candidates(election_id):
    return Candidate.query.filter_by(election_id=election_id).count()


def vote_counts_by_candidate(election_id):
    """candidate_id -> number of votes, for candidates with at least one vote."""
    rows = (
        db.session.query(Vote.candidate_id, func.count(Vote.id))
        .filter(Vote.election_id == election_id)
        .group_by(Vote.candidate_id)
        .all()
    )
    return {candidate_id: count for candidate_id, count in rows}


def election_counts(election):
    """Recompute and store the denormalized counters of ``election``."""
    election.candidate_count = count_candidates(election.id)
    election.voter_count = count_voters(election.id)
    return election.candidate_count, election.voter_count


def compute_snapshot(election_id):
    """
    Point-in-time tally for an election.

    Always recomputed from the votes table, never from a running counter,
    so it reflects whatever votes are committed at call time.
    """
    election = get_election_or_404(election_id)
    counts = vote_counts_by_candidate(election.id)

    candidates = []
    for candidate in Candidate.query.filter_by(election_id=election.id).order_by(Candidate.id):
        candidates.append({
            "candidate_id": candidate.id,
            "number": candidate.number,
            "name": candidate.name,
            "image_url": candidate.image_url,
            "vote_count": counts.get(candidate.id, 0),
        })

    return {
        "election_id": election.id,
        "voter_count": count_voters(election.id),
        "candidates": candidates,
    }
