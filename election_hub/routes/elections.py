from flask import Blueprint

from election_hub.auth import login_required
from election_hub.errors import NotFoundError
from election_hub.models.user import ROLE_ADMIN
from election_hub.routes.helpers import ok, request_data
from election_hub.services import elections as election_service

bp = Blueprint("elections", __name__, url_prefix="/api")


@bp.route("/current-election")
def current_election():
    election = election_service.get_active_election()
    if election is None:
        raise NotFoundError("No active election found")
    return ok({
        "id": election.id,
        "title": election.title,
        "election_date": election.election_date.isoformat(),
        "status": election.status,
    })


@bp.route("/elections")
@login_required()
def list_elections():
    elections = election_service.list_elections()
    return ok([election.to_dict() for election in elections])


@bp.route("/elections", methods=["POST"])
@login_required(role=ROLE_ADMIN)
def create_election():
    data = request_data()
    election = election_service.create_election(
        data.get("title"), data.get("election_date")
    )
    return ok(election.to_dict(), message="Election created successfully", status_code=201)


@bp.route("/elections/<int:election_id>")
@login_required()
def election_detail(election_id):
    election = election_service.get_election(election_id)
    return ok(election_service.election_detail(election))


@bp.route("/elections/<int:election_id>", methods=["POST"])
@login_required(role=ROLE_ADMIN)
def update_election(election_id):
    data = request_data()
    election = election_service.update_election(
        election_id,
        title=data.get("title"),
        election_date=data.get("election_date"),
    )
    return ok(election.to_dict(), message="Election updated successfully")


@bp.route("/elections/<int:election_id>", methods=["DELETE"])
@login_required(role=ROLE_ADMIN)
def delete_election(election_id):
    election_service.delete_election(election_id)
    return ok(message="Election deleted successfully")
