from datetime import datetime

from election_hub.extensions import db

STATUS_UPCOMING = "upcoming"
STATUS_ACTIVE = "active"
STATUS_CLOSED = "closed"
STATUSES = (STATUS_UPCOMING, STATUS_ACTIVE, STATUS_CLOSED)


class Election(db.Model):
    __tablename__ = "elections"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)

    # at most one election per calendar day
    election_date = db.Column(db.Date, nullable=False, unique=True)

    # "upcoming", "active", "closed"; derived from election_date
    status = db.Column(db.String(20), nullable=False, default=STATUS_UPCOMING)

    # Denormalized projections, refreshed on read
    candidate_count = db.Column(db.Integer, nullable=False, default=0)
    voter_count = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.now, onupdate=datetime.now
    )

    candidates = db.relationship(
        "Candidate",
        backref="election",
        lazy=True,
        order_by="Candidate.id",
    )
    votes = db.relationship("Vote", backref="election", lazy=True)

    @property
    def election_date_display(self):
        # e.g. "Monday, 19 October 2026"
        return self.election_date.strftime("%A, %d %B %Y")

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "election_date": self.election_date.isoformat(),
            "election_date_display": self.election_date_display,
            "status": self.status,
            "candidate_count": self.candidate_count,
            "voter_count": self.voter_count,
        }
