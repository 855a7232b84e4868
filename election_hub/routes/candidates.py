from flask import Blueprint, request

from election_hub.auth import login_required
from election_hub.models.user import ROLE_ADMIN
from election_hub.routes.helpers import ok, parse_int, request_data
from election_hub.services import candidates as candidate_service

bp = Blueprint("candidates", __name__, url_prefix="/api/candidates")

CANDIDATE_FIELDS = ("number", "name", "vision", "mission", "image_url")


def _fields(data):
    return {key: data[key] for key in CANDIDATE_FIELDS if key in data}


@bp.route("")
@login_required()
def list_candidates():
    election_id = request.args.get("election_id")
    if election_id is not None:
        election_id = parse_int(election_id, "election_id")
    candidates = candidate_service.list_candidates(election_id)
    return ok([candidate.to_dict() for candidate in candidates])


@bp.route("", methods=["POST"])
@login_required(role=ROLE_ADMIN)
def create_candidate():
    data = request_data()
    election_id = data.get("election_id")
    if election_id is not None:
        election_id = parse_int(election_id, "election_id")

    candidate = candidate_service.create_candidate(election_id, **_fields(data))
    return ok(candidate.to_dict(), message="Candidate created successfully", status_code=201)


@bp.route("/<int:candidate_id>")
@login_required()
def candidate_detail(candidate_id):
    candidate = candidate_service.get_candidate_or_404(candidate_id)
    return ok(candidate.to_dict())


@bp.route("/<int:candidate_id>", methods=["POST"])
@login_required(role=ROLE_ADMIN)
def update_candidate(candidate_id):
    candidate = candidate_service.update_candidate(candidate_id, **_fields(request_data()))
    return ok(candidate.to_dict(), message="Candidate updated successfully")


@bp.route("/<int:candidate_id>", methods=["DELETE"])
@login_required(role=ROLE_ADMIN)
def delete_candidate(candidate_id):
    candidate_service.delete_candidate(candidate_id)
    return ok(message="Candidate and related votes deleted successfully")
