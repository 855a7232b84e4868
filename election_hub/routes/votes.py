from flask import Blueprint, g

from election_hub.auth import login_required
from election_hub.models.user import ROLE_ADMIN, ROLE_VOTER
from election_hub.routes.helpers import ok, parse_int, request_data
from election_hub.services import ledger

bp = Blueprint("votes", __name__, url_prefix="/api")


@bp.route("/votes", methods=["POST"])
@login_required(role=ROLE_VOTER)
def cast_vote():
    candidate_id = parse_int(request_data().get("candidate_id"), "candidate_id")
    vote = ledger.cast_vote(g.user.id, candidate_id)
    return ok(vote.to_dict(), message="Vote recorded successfully", status_code=201)


@bp.route("/votes/check/<int:election_id>")
@login_required()
def check_vote(election_id):
    return ok(ledger.has_voted(g.user.id, election_id))


@bp.route("/votes/results/<int:election_id>")
@login_required(role=ROLE_ADMIN)
def results(election_id):
    return ok(ledger.tally_results(election_id))


@bp.route("/profile")
@login_required()
def profile():
    return ok(g.user.to_dict())
