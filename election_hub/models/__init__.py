from election_hub.models.candidate import Candidate
from election_hub.models.election import Election
from election_hub.models.user import User
from election_hub.models.vote import Vote

__all__ = [
    "User",
    "Election",
    "Candidate",
    "Vote",
]
