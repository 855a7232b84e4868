import logging
import time

import click
from flask import current_app
from flask.cli import AppGroup

from election_hub.services.status import sweep_election_statuses

log = logging.getLogger(__name__)

elections_cli = AppGroup("elections", help="Election maintenance commands.")


@elections_cli.command("update-status")
def update_status():
    """Update the status of all elections based on their dates."""
    updated = sweep_election_statuses()
    click.echo(f"Updated status for {updated} elections")


@elections_cli.command("run-scheduler")
@click.option(
    "--interval",
    type=float,
    default=None,
    help="Seconds between sweeps (defaults to STATUS_SWEEP_INTERVAL_SECONDS).",
)
def run_scheduler(interval):
    """Sweep election statuses on a fixed interval until interrupted."""
    if interval is None:
        interval = current_app.config["STATUS_SWEEP_INTERVAL_SECONDS"]

    log.info("Status sweep running every %s seconds", interval)
    try:
        while True:
            sweep_election_statuses()
            time.sleep(interval)
    except KeyboardInterrupt:
        log.info("Status sweep stopped")
