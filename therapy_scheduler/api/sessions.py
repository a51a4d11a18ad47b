"""Manual session editing, every change re-validated before it is stored."""
from __future__ import annotations

from typing import Any

from flask import request
from flask_restx import Namespace, Resource, fields
from werkzeug.exceptions import BadRequest

from ..extensions import db
from ..models import Schedule, Session, format_time
from ..scheduling import WEEK_DAYS, ScheduledSession, ValidationResult
from ..services.schedule_service import active_schedule, check_session
from .parsing import parse_time, parse_weekday


ns = Namespace("sessions", description="Create, edit and validate individual sessions")

session_model = ns.model(
    "Session",
    {
        "id": fields.Integer(readonly=True),
        "schedule_id": fields.Integer,
        "staff_id": fields.Integer(required=True),
        "room_id": fields.Integer(required=True),
        "weekday": fields.String(required=True, enum=[day.value for day in WEEK_DAYS]),
        "start_time": fields.String(required=True, description="HH:MM"),
        "end_time": fields.String(required=True, description="HH:MM"),
    },
)

session_patch = ns.model(
    "SessionPatch",
    {
        "staff_id": fields.Integer,
        "room_id": fields.Integer,
        "weekday": fields.String(enum=[day.value for day in WEEK_DAYS]),
        "start_time": fields.String(description="HH:MM"),
        "end_time": fields.String(description="HH:MM"),
    },
)

validation_model = ns.model(
    "ValidationResult",
    {
        "valid": fields.Boolean,
        "code": fields.String,
        "message": fields.String,
        "activity": fields.String,
    },
)


def serialize_session(session: Session) -> dict[str, Any]:
    return {
        "id": session.id,
        "schedule_id": session.schedule_id,
        "staff_id": session.staff_id,
        "room_id": session.room_id,
        "weekday": session.weekday,
        "start_time": format_time(session.start_time),
        "end_time": format_time(session.end_time),
    }


def _candidate_from(payload: dict[str, Any], *, session_id: int | None = None) -> ScheduledSession:
    start = parse_time(ns, payload["start_time"], "start_time")
    end = parse_time(ns, payload["end_time"], "end_time")
    if end <= start:
        ns.abort(400, "end_time must be after start_time")
    values = dict(
        day=parse_weekday(ns, payload["weekday"]),
        start=format_time(start),
        end=format_time(end),
        staff_id=payload["staff_id"],
        room_id=payload["room_id"],
    )
    if session_id is not None:
        values["id"] = session_id
    return ScheduledSession(**values)


def _resolve_schedule_id(payload: dict[str, Any]) -> int | None:
    if payload.get("schedule_id") is not None:
        schedule = Schedule.query.get_or_404(payload["schedule_id"])
        return schedule.id
    current = active_schedule(db.session)
    return current.id if current is not None else None


def _abort_invalid(result: ValidationResult) -> None:
    """Reject with a 400 whose body carries the violation code."""
    body = result.to_dict()
    del body["valid"]
    error = BadRequest(result.message)
    error.data = body
    raise error


@ns.route("")
@ns.param("schedule_id", "Only list sessions of this schedule")
class SessionList(Resource):
    @ns.marshal_list_with(session_model)
    def get(self) -> list[dict[str, Any]]:
        query = Session.query
        schedule_id = request.args.get("schedule_id", type=int)
        if schedule_id is not None:
            query = query.filter_by(schedule_id=schedule_id)
        sessions = query.order_by(Session.id).all()
        return [serialize_session(session) for session in sessions]

    @ns.expect(session_model, validate=True)
    @ns.marshal_with(session_model, code=201)
    def post(self) -> tuple[dict[str, Any], int]:
        payload = request.json or {}
        schedule_id = _resolve_schedule_id(payload)
        candidate = _candidate_from(payload)
        result = check_session(db.session, candidate, schedule_id)
        if not result.valid:
            _abort_invalid(result)

        session = Session(
            schedule_id=schedule_id,
            staff_id=candidate.staff_id,
            room_id=candidate.room_id,
            weekday=candidate.day.value,
            start_time=parse_time(ns, candidate.start, "start_time"),
            end_time=parse_time(ns, candidate.end, "end_time"),
        )
        db.session.add(session)
        db.session.commit()
        return serialize_session(session), 201


@ns.route("/validate")
class SessionValidation(Resource):
    @ns.expect(session_model, validate=True)
    @ns.marshal_with(validation_model, skip_none=True)
    def post(self) -> dict[str, Any]:
        payload = request.json or {}
        schedule_id = _resolve_schedule_id(payload)
        candidate = _candidate_from(payload, session_id=payload.get("id"))
        return check_session(db.session, candidate, schedule_id).to_dict()


@ns.route("/<int:session_id>")
class SessionResource(Resource):
    @ns.marshal_with(session_model)
    def get(self, session_id: int) -> dict[str, Any]:
        session = Session.query.get_or_404(session_id)
        return serialize_session(session)

    @ns.expect(session_patch, validate=True)
    @ns.marshal_with(session_model)
    def put(self, session_id: int) -> dict[str, Any]:
        session = Session.query.get_or_404(session_id)
        payload = {**serialize_session(session), **(request.json or {})}
        candidate = _candidate_from(payload, session_id=session.id)
        result = check_session(db.session, candidate, session.schedule_id)
        if not result.valid:
            _abort_invalid(result)

        session.staff_id = candidate.staff_id
        session.room_id = candidate.room_id
        session.weekday = candidate.day.value
        session.start_time = parse_time(ns, candidate.start, "start_time")
        session.end_time = parse_time(ns, candidate.end, "end_time")
        db.session.commit()
        return serialize_session(session)

    def delete(self, session_id: int) -> tuple[dict[str, str], int]:
        session = Session.query.get_or_404(session_id)
        db.session.delete(session)
        db.session.commit()
        return {"status": "deleted"}, 204
