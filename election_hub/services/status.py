import logging
from datetime import date

from election_hub.extensions import db
from election_hub.models import Election
from election_hub.models.election import STATUS_ACTIVE, STATUS_CLOSED, STATUS_UPCOMING

log = logging.getLogger(__name__)


def resolve_status(election_date, today=None):
    """
    Map an election date to its status for ``today`` (server local date).

    Same day means calendar date equality, so an election stays active for
    the whole of its day.
    """
    if today is None:
        today = date.today()

    if today < election_date:
        return STATUS_UPCOMING
    if today == election_date:
        return STATUS_ACTIVE
    return STATUS_CLOSED


def refresh_status(election, today=None):
    """Set ``election.status`` from its date. Returns True if it changed."""
    status = resolve_status(election.election_date, today=today)
    if election.status == status:
        return False
    election.status = status
    return True


def sweep_election_statuses(today=None):
    """Rewrite the persisted status of every election that has drifted."""
    updated = 0
    for election in Election.query.order_by(Election.id).all():
        old_status = election.status
        if refresh_status(election, today=today):
            log.info(
                "Election %s status %s -> %s", election.id, old_status, election.status
            )
            updated += 1

    if updated:
        db.session.commit()

    log.info("Updated status for %d elections", updated)
    return updated
