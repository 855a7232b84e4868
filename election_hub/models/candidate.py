from datetime import datetime

from election_hub.extensions import db


class Candidate(db.Model):
    __tablename__ = "candidates"
    __table_args__ = (
        db.UniqueConstraint("election_id", "number", name="uq_candidates_election_number"),
    )

    id = db.Column(db.Integer, primary_key=True)
    election_id = db.Column(db.Integer, db.ForeignKey("elections.id"), nullable=False)

    # ballot number, digits only, unique within the election
    number = db.Column(db.String(20), nullable=False)
    name = db.Column(db.String(200), nullable=False)
    vision = db.Column(db.Text, nullable=False)
    mission = db.Column(db.Text, nullable=False)

    # path or URL of the image in blob storage
    image_url = db.Column(db.String(500), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.now)

    # deleting a candidate deletes its votes in the same flush
    votes = db.relationship(
        "Vote", backref="candidate", lazy=True, cascade="all, delete-orphan"
    )

    def to_dict(self):
        return {
            "id": self.id,
            "election_id": self.election_id,
            "number": self.number,
            "name": self.name,
            "vision": self.vision,
            "mission": self.mission,
            "image_url": self.image_url,
        }
