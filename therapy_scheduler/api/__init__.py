"""REST API definition using Flask-RESTX."""
from __future__ import annotations

from flask import Flask
from flask_restx import Api

from .activities import ns as activities_ns
from .health import ns as health_ns
from .rooms import ns as rooms_ns
from .schedules import ns as schedules_ns
from .sessions import ns as sessions_ns
from .staff import ns as staff_ns


def register_namespaces(api: Api) -> None:
    """Register all API namespaces."""
    api.add_namespace(health_ns, path="/health")
    api.add_namespace(staff_ns, path="/staff")
    api.add_namespace(rooms_ns, path="/rooms")
    api.add_namespace(activities_ns, path="/activities")
    api.add_namespace(schedules_ns, path="/schedule")
    api.add_namespace(sessions_ns, path="/sessions")


def create_api(app: Flask) -> Api:
    api = Api(
        app,
        version=app.config.get("API_VERSION", "0.1.0"),
        title=app.config.get("API_TITLE", "Therapy Scheduler API"),
        doc="/api/docs",
        prefix="/api",
    )
    register_namespaces(api)
    return api
