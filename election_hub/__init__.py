from flask import Flask

from election_hub import auth
from election_hub.cli import elections_cli
from election_hub.config import Config
from election_hub.errors import register_error_handlers
from election_hub.extensions import db, migrate
from election_hub.feed import FeedRegistry
from election_hub.logger import configure_logging
from election_hub.routes import register_blueprints


def create_app(config_object=None):
    app = Flask(__name__)
    app.config.from_object(config_object or Config)

    configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)

    auth.init_app(app)
    register_blueprints(app)
    register_error_handlers(app)
    app.cli.add_command(elections_cli)

    app.extensions["live_feeds"] = FeedRegistry()

    return app
