"""Endpoints for generating weekly schedules and choosing the active one."""
from __future__ import annotations

from typing import Any

from flask_restx import Namespace, Resource, fields

from ..extensions import db
from ..models import Schedule
from ..scheduling import MalformedTime
from ..services.schedule_service import (
    GenerationError,
    activate_schedule,
    active_schedule,
    generate_and_store,
)
from .sessions import serialize_session, session_model


ns = Namespace("schedule", description="Weekly schedule generation")

schedule_model = ns.model(
    "Schedule",
    {
        "id": fields.Integer(readonly=True),
        "generated_at": fields.String,
        "is_active": fields.Boolean,
        "session_count": fields.Integer,
        "sessions": fields.List(fields.Nested(session_model)),
    },
)

unmet_quota_model = ns.model(
    "UnmetQuota",
    {
        "staff_id": fields.Integer,
        "remaining": fields.Integer,
    },
)

generation_response = ns.model(
    "GenerationResponse",
    {
        "schedule": fields.Nested(schedule_model),
        "created": fields.Integer,
        "unmet_quotas": fields.List(fields.Nested(unmet_quota_model)),
    },
)


def serialize_schedule(schedule: Schedule, *, with_sessions: bool = True) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": schedule.id,
        "generated_at": schedule.generated_at.isoformat(),
        "is_active": schedule.is_active,
        "session_count": len(schedule.sessions),
    }
    if with_sessions:
        payload["sessions"] = [serialize_session(session) for session in schedule.sessions]
    return payload


@ns.route("/generate")
class GenerateResource(Resource):
    @ns.marshal_with(generation_response)
    def post(self) -> dict[str, Any]:
        try:
            result = generate_and_store(db.session)
        except MalformedTime as exc:
            db.session.rollback()
            ns.abort(400, str(exc))
        except GenerationError as exc:
            ns.abort(400, str(exc))

        return {
            "schedule": serialize_schedule(result.schedule),
            "created": len(result.schedule.sessions),
            "unmet_quotas": [
                {"staff_id": staff_id, "remaining": remaining}
                for staff_id, remaining in result.unmet.items()
            ],
        }


@ns.route("")
class ScheduleList(Resource):
    @ns.marshal_list_with(schedule_model, skip_none=True)
    def get(self) -> list[dict[str, Any]]:
        schedules = Schedule.query.order_by(Schedule.generated_at.desc(), Schedule.id.desc()).all()
        return [serialize_schedule(schedule, with_sessions=False) for schedule in schedules]


@ns.route("/active")
class ActiveScheduleResource(Resource):
    @ns.marshal_with(schedule_model)
    def get(self) -> dict[str, Any]:
        schedule = active_schedule(db.session)
        if schedule is None:
            ns.abort(404, "No active schedule")
        return serialize_schedule(schedule)


@ns.route("/<int:schedule_id>")
class ScheduleResource(Resource):
    @ns.marshal_with(schedule_model)
    def get(self, schedule_id: int) -> dict[str, Any]:
        schedule = Schedule.query.get_or_404(schedule_id)
        return serialize_schedule(schedule)

    def delete(self, schedule_id: int) -> tuple[dict[str, str], int]:
        schedule = Schedule.query.get_or_404(schedule_id)
        db.session.delete(schedule)
        db.session.commit()
        return {"status": "deleted"}, 204


@ns.route("/<int:schedule_id>/activate")
class ScheduleActivation(Resource):
    @ns.marshal_with(schedule_model)
    def put(self, schedule_id: int) -> dict[str, Any]:
        schedule = Schedule.query.get_or_404(schedule_id)
        activate_schedule(db.session, schedule)
        return serialize_schedule(schedule)
