from __future__ import annotations

from therapy_scheduler import create_app
from therapy_scheduler.config import Config
from therapy_scheduler.extensions import db
from therapy_scheduler.models import Room


def test_health_route(tmp_path):
    class FileConfig(Config):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path/'test.db'}"
        SECRET_KEY = "test"
        TESTING = True

    app = create_app(FileConfig)

    with app.app_context():
        db.session.add(Room(name="Therapy room 1"))
        db.session.commit()

    client = app.test_client()
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "database": "ok"}

    rooms = client.get("/api/rooms").get_json()
    assert [room["name"] for room in rooms] == ["Therapy room 1"]


def test_cli_seed_and_generate(tmp_path):
    class FileConfig(Config):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path/'cli.db'}"
        TESTING = True

    app = create_app(FileConfig)
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed"])
    assert result.exit_code == 0
    assert "seeded" in result.output

    result = runner.invoke(args=["seed"])
    assert "nothing to seed" in result.output

    result = runner.invoke(args=["generate-schedule"])
    assert result.exit_code == 0
    assert "session(s) created" in result.output


def test_cli_generate_without_staff(tmp_path):
    class FileConfig(Config):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path/'empty.db'}"
        TESTING = True

    runner = create_app(FileConfig).test_cli_runner()

    result = runner.invoke(args=["generate-schedule"])
    assert result.exit_code != 0
    assert "No active staff members found" in result.output
