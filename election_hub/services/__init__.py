from election_hub.services.hourly import compute_hourly
from election_hub.services.ledger import cast_vote, has_voted, tally_results
from election_hub.services.status import resolve_status, sweep_election_statuses
from election_hub.services.tally import compute_snapshot

__all__ = [
    "cast_vote",
    "compute_hourly",
    "compute_snapshot",
    "has_voted",
    "resolve_status",
    "sweep_election_statuses",
    "tally_results",
]
