import logging

import click
from flask import Flask
from flask.cli import with_appcontext

from .config import Config
from .extensions import db, migrate


def _configure_logging(app: Flask) -> None:
    level = logging.getLevelName(app.config.get("LOG_LEVEL", "INFO"))
    if not isinstance(level, int):
        level = logging.INFO
    app.logger.setLevel(level)
    logging.getLogger(f"{__name__}.scheduling").setLevel(level)


def create_app(config_class: type[Config] = Config) -> Flask:
    app = Flask(__name__, static_folder=None)
    app.config.from_object(config_class)
    _configure_logging(app)

    db.init_app(app)
    migrate.init_app(app, db)

    from . import models  # noqa: F401  # Ensure models registered for migrations
    from .api import create_api

    create_api(app)

    with app.app_context():
        db.create_all()

    @app.cli.command("seed")
    @with_appcontext
    def seed() -> None:
        """Seed demo staff, rooms and activities."""
        from .seed import seed_data

        if seed_data():
            click.echo("Database seeded with sample data.")
        else:
            click.echo("Database already contains staff; nothing to seed.")

    @app.cli.command("generate-schedule")
    @with_appcontext
    def generate_schedule_command() -> None:
        """Generate a new weekly schedule and make it active."""
        from .services.schedule_service import GenerationError, generate_and_store

        try:
            result = generate_and_store(db.session)
        except GenerationError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(
            f"Schedule {result.schedule.id}: {len(result.schedule.sessions)} session(s) created."
        )
        for staff_id, remaining in result.unmet.items():
            click.echo(f"  staff {staff_id}: {remaining} session(s) left unassigned")

    app.logger.info("Therapy scheduler ready (database: %s)", app.config["SQLALCHEMY_DATABASE_URI"])
    return app


__all__ = ["create_app", "db"]
