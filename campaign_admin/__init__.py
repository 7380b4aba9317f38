import logging

import click
from flask import Flask, jsonify, redirect, url_for
from dotenv import load_dotenv
from werkzeug.exceptions import HTTPException

from .config import load_config
from .errors import ValidationError, NotFoundError
from .extensions import db, init_database
from .importer import import_programs
from .seed import seed_demo_data
from .routes.api import api_bp
from .routes.campaigns import campaigns_bp
from .routes.ad_groups import ad_groups_bp
from .routes.ads import ads_bp
from .routes.programs import programs_bp

logger = logging.getLogger(__name__)


def create_app(test_config=None):
    load_dotenv()
    app = Flask(__name__)
    app.config.from_mapping(load_config())
    if test_config:
        app.config.from_mapping(test_config)

    logging.basicConfig(level=app.config["LOG_LEVEL"])

    db.init_app(app)

    # Blueprints
    for bp in (campaigns_bp, ad_groups_bp, ads_bp, programs_bp, api_bp):
        app.register_blueprint(bp, url_prefix="/api")

    _register_error_handlers(app)
    _register_commands(app)

    @app.route("/")
    def index():
        return redirect(url_for("campaigns.list_campaigns"))

    with app.app_context():
        init_database()
        if app.config["SEED_DEMO_DATA"]:
            seed_demo_data(db.session)
        if app.config["PROGRAMS_IMPORT_PATH"]:
            import_programs(db.session, app.config["PROGRAMS_IMPORT_PATH"])

    return app


def _register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        db.session.rollback()
        return jsonify({"message": e.message, "errors": e.errors}), 400

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        return jsonify({"message": e.message}), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception("Unhandled error: %s", e)
        db.session.rollback()
        return jsonify({"message": "Internal server error"}), 500


def _register_commands(app):
    @app.cli.command("seed-demo")
    def seed_demo_command():
        """Insert demo campaigns into an empty database."""
        if seed_demo_data(db.session):
            click.echo("Seeded demo data.")
        else:
            click.echo("Campaigns already present, nothing seeded.")

    @app.cli.command("import-programs")
    @click.argument("path", type=click.Path(exists=True, dir_okay=False))
    def import_programs_command(path):
        """Load programs from a ';'-separated CSV or an XLSX file."""
        n = import_programs(db.session, path)
        click.echo(f"Imported {n} programs.")
