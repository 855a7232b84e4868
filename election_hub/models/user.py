from election_hub.extensions import db

ROLE_ADMIN = "admin"
ROLE_VOTER = "voter"


class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)

    # "admin" or "voter"
    role = db.Column(db.String(20), nullable=False, default=ROLE_VOTER)

    votes = db.relationship("Vote", backref="user", lazy=True)

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
        }
