from datetime import datetime, time, timedelta

from election_hub.extensions import db
from election_hub.models import Candidate, Vote
from election_hub.services.tally import get_election_or_404

HOURS_PER_DAY = 24


def day_bounds(day):
    """Half-open [start, end) of a calendar day in server local time."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def compute_hourly(election_id, day):
    """
    Per-candidate vote counts for each hour of ``day``.

    Bucket ``h`` holds votes cast in [h:00, h+1:00); a vote at exactly the
    next hour falls into the next bucket.
    """
    election = get_election_or_404(election_id)
    start, end = day_bounds(day)

    buckets = {}
    candidates = Candidate.query.filter_by(election_id=election.id).order_by(Candidate.id).all()
    for candidate in candidates:
        buckets[candidate.id] = [0] * HOURS_PER_DAY

    rows = (
        db.session.query(Vote.candidate_id, Vote.created_at)
        .filter(
            Vote.election_id == election.id,
            Vote.created_at >= start,
            Vote.created_at < end,
        )
        .all()
    )
    for candidate_id, created_at in rows:
        if candidate_id in buckets:
            buckets[candidate_id][created_at.hour] += 1

    return {
        "election_id": election.id,
        "date": day.isoformat(),
        "candidates": [
            {
                "candidate_id": candidate.id,
                "number": candidate.number,
                "name": candidate.name,
                "hourly": buckets[candidate.id],
                "total": sum(buckets[candidate.id]),
            }
            for candidate in candidates
        ],
    }
