from election_hub.routes import candidates, dashboard, elections, votes


def register_blueprints(app):
    app.register_blueprint(elections.bp)
    app.register_blueprint(candidates.bp)
    app.register_blueprint(votes.bp)
    app.register_blueprint(dashboard.bp)
