from functools import wraps

from flask import g, session

from election_hub.errors import error_response
from election_hub.extensions import db
from election_hub.models import User


def load_current_user():
    """Resolve the identity the session carries into ``g.user``."""
    user_id = session.get("user_id")
    g.user = db.session.get(User, user_id) if user_id is not None else None


def login_required(role=None):
    def wrapper(fn):
        @wraps(fn)
        def decorated(*args, **kwargs):
            if g.get("user") is None:
                return error_response("Unauthenticated", 401)
            if role and g.user.role != role:
                return error_response("Forbidden", 403)
            return fn(*args, **kwargs)
        return decorated
    return wrapper


def init_app(app):
    app.before_request(load_current_user)
