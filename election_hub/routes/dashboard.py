from datetime import datetime

from flask import Blueprint, Response, current_app, request, stream_with_context

from election_hub.auth import login_required
from election_hub.extensions import db
from election_hub.feed import SSE_HEADERS, LiveFeed
from election_hub.models.user import ROLE_ADMIN
from election_hub.routes.helpers import parse_day
from election_hub.services.hourly import compute_hourly
from election_hub.services.status import resolve_status
from election_hub.services.tally import compute_snapshot, get_election_or_404

bp = Blueprint("dashboard", __name__, url_prefix="/api/dashboard")


def election_update(election_id):
    try:
        election = get_election_or_404(election_id)
        payload = compute_snapshot(election.id)
        payload.update({
            "title": election.title,
            "election_date": election.election_date.isoformat(),
            "election_date_display": election.election_date_display,
            "status": resolve_status(election.election_date),
            "timestamp": datetime.now().astimezone().isoformat(),
        })
        return payload
    finally:
        # end the transaction so the next tick sees newly committed votes
        db.session.remove()


def hourly_update(election_id, day):
    try:
        payload = compute_hourly(election_id, day)
        payload["timestamp"] = datetime.now().astimezone().isoformat()
        return payload
    finally:
        db.session.remove()


def _stream(feed):
    return Response(
        stream_with_context(feed.events()),
        mimetype="text/event-stream",
        headers=SSE_HEADERS,
    )


@bp.route("/stream/<int:election_id>")
@login_required(role=ROLE_ADMIN)
def stream(election_id):
    get_election_or_404(election_id)

    feed = LiveFeed(
        lambda: election_update(election_id),
        event="election_update",
        interval=current_app.config["FEED_INTERVAL_SECONDS"],
        retry_ms=current_app.config["FEED_RETRY_MS"],
        registry=current_app.extensions["live_feeds"],
        name=f"election-{election_id}",
    )
    return _stream(feed)


@bp.route("/stream/<int:election_id>/hourly")
@login_required(role=ROLE_ADMIN)
def stream_hourly(election_id):
    get_election_or_404(election_id)
    day = parse_day(request.args.get("date"))

    feed = LiveFeed(
        lambda: hourly_update(election_id, day),
        event="hourly_update",
        interval=current_app.config["HOURLY_FEED_INTERVAL_SECONDS"],
        retry_ms=current_app.config["FEED_RETRY_MS"],
        registry=current_app.extensions["live_feeds"],
        name=f"election-{election_id}-hourly",
    )
    return _stream(feed)
