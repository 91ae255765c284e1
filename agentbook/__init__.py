import logging
import os
from datetime import datetime, timezone

import click
from dotenv import load_dotenv
from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from agentbook.config import config_by_env
from agentbook.errors import register_error_handlers
from agentbook.extensions import bcrypt, cache, db, limiter, login_manager, migrate
from agentbook.models import Agent
from agentbook.routes.api.v1 import api_v1_bp
from agentbook.schemas import as_date
from agentbook.services import AuthService, BookingService


@login_manager.user_loader
def load_agent(agent_id):
    return db.session.get(Agent, int(agent_id))


def create_app(env=None, test_config=None):
    load_dotenv()
    env = env or os.getenv("FLASK_ENV", "development")

    project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(config_by_env.get(env, config_by_env["development"]))
    if test_config:
        app.config.update(test_config)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)
    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))

    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI", "")
    if db_uri.startswith("sqlite:///") and not db_uri.startswith("sqlite:////") and db_uri != "sqlite:///:memory:":
        relative_path = db_uri.replace("sqlite:///", "", 1)
        absolute_path = os.path.join(project_root, relative_path)
        os.makedirs(os.path.dirname(absolute_path), exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{absolute_path}"

    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)
    cache.init_app(app)
    limiter.init_app(app)
    login_manager.init_app(app)
    _init_sentry(app)

    register_error_handlers(app)
    app.register_blueprint(api_v1_bp, url_prefix="/api/v1")
    _register_commands(app)

    if env == "development":
        with app.app_context():
            db.create_all()

    return app


def _init_sentry(app):
    dsn = app.config.get("SENTRY_DSN")
    if not dsn:
        return
    import sentry_sdk
    from sentry_sdk.integrations.flask import FlaskIntegration

    try:
        sentry_sdk.init(
            dsn=dsn,
            integrations=[FlaskIntegration()],
            traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.05")),
            environment=os.getenv("FLASK_ENV", "production"),
        )
        app.logger.info("Sentry initialized.")
    except Exception as exc:
        app.logger.warning("Sentry initialization failed: %s", exc)


def _register_commands(app):
    @app.cli.command("archive-sweep")
    @click.option("--now", default=None, help="Treat this ISO date as today (defaults to the current UTC date).")
    def archive_sweep_command(now):
        """Archive open bookings whose check-out date has passed."""
        moment = as_date(now) if now else datetime.now(timezone.utc)
        archived = BookingService.archive_sweep(moment)
        click.echo(f"Archived {archived} booking(s).")

    @app.cli.command("create-admin")
    @click.option("--name", required=True)
    @click.option("--email", required=True)
    @click.password_option()
    def create_admin_command(name, email, password):
        """Create a platform administrator account."""
        admin = AuthService.register_agent({"name": name, "email": email, "password": password}, role="admin")
        click.echo(f"Created admin {admin.email} (id {admin.id}).")
