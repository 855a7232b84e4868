from datetime import datetime

from election_hub.extensions import db


class Vote(db.Model):
    __tablename__ = "votes"
    __table_args__ = (
        # One vote per voter per election. This constraint, not the
        # pre-check in the ledger, is what rejects concurrent double votes.
        db.UniqueConstraint("user_id", "election_id", name="uq_votes_user_election"),
    )

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    candidate_id = db.Column(db.Integer, db.ForeignKey("candidates.id"), nullable=False)

    # copied from the candidate when the vote is cast
    election_id = db.Column(db.Integer, db.ForeignKey("elections.id"), nullable=False)

    # server local time
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now, index=True)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "candidate_id": self.candidate_id,
            "election_id": self.election_id,
            "created_at": self.created_at.isoformat(),
        }
