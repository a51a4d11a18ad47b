"""Staff CRUD endpoints."""
from __future__ import annotations

from typing import Any

from flask import request
from flask_restx import Namespace, Resource, fields

from ..extensions import db
from ..models import Staff, StaffWorkingHours, format_time
from ..scheduling import WEEK_DAYS
from .parsing import NullableString, parse_time, parse_weekday


ns = Namespace("staff", description="CRUD operations for therapists and other staff")

working_hours_model = ns.model(
    "WorkingHours",
    {
        "weekday": fields.String(required=True, enum=[day.value for day in WEEK_DAYS]),
        "start_time": fields.String(required=True, description="HH:MM"),
        "end_time": fields.String(required=True, description="HH:MM"),
    },
)

staff_model = ns.model(
    "Staff",
    {
        "id": fields.Integer(readonly=True),
        "first_name": fields.String(required=True),
        "last_name": NullableString,
        "role": NullableString,
        "weekly_sessions": fields.Integer(required=True, min=0),
        "color": NullableString,
        "is_active": fields.Boolean(default=True),
        "working_hours": fields.List(fields.Nested(working_hours_model)),
    },
)


def serialize_staff(staff: Staff) -> dict[str, Any]:
    return {
        "id": staff.id,
        "first_name": staff.first_name,
        "last_name": staff.last_name,
        "role": staff.role,
        "weekly_sessions": staff.weekly_sessions,
        "color": staff.color,
        "is_active": staff.is_active,
        "working_hours": [
            {
                "weekday": entry.weekday,
                "start_time": format_time(entry.start_time),
                "end_time": format_time(entry.end_time),
            }
            for entry in staff.working_hours
        ],
    }


def _apply_payload(staff: Staff, payload: dict[str, Any]) -> None:
    hours = _parse_working_hours(payload.get("working_hours", []))
    staff.first_name = payload["first_name"]
    staff.last_name = payload.get("last_name")
    staff.role = payload.get("role")
    staff.weekly_sessions = payload["weekly_sessions"]
    staff.color = payload.get("color")
    staff.is_active = payload.get("is_active", True)
    staff.working_hours.clear()
    db.session.flush()
    staff.working_hours.extend(hours)


def _parse_working_hours(payload: list[dict[str, Any]]) -> list[StaffWorkingHours]:
    entries: dict[str, StaffWorkingHours] = {}
    for item in payload:
        weekday = parse_weekday(ns, item["weekday"])
        start = parse_time(ns, item["start_time"], "start_time")
        end = parse_time(ns, item["end_time"], "end_time")
        if end <= start:
            ns.abort(400, f"Working hours on {weekday.value} must end after they start")
        if weekday.value in entries:
            ns.abort(400, f"Working hours for {weekday.value} are given more than once")
        entries[weekday.value] = StaffWorkingHours(
            weekday=weekday.value, start_time=start, end_time=end
        )
    return list(entries.values())


@ns.route("")
class StaffList(Resource):
    @ns.marshal_list_with(staff_model)
    def get(self) -> list[dict[str, Any]]:
        members = Staff.query.order_by(Staff.id).all()
        return [serialize_staff(member) for member in members]

    @ns.expect(staff_model, validate=True)
    @ns.marshal_with(staff_model, code=201)
    def post(self) -> tuple[dict[str, Any], int]:
        payload = request.json or {}
        staff = Staff()
        _apply_payload(staff, payload)
        db.session.add(staff)
        db.session.commit()
        return serialize_staff(staff), 201


@ns.route("/<int:staff_id>")
class StaffResource(Resource):
    @ns.marshal_with(staff_model)
    def get(self, staff_id: int) -> dict[str, Any]:
        staff = Staff.query.get_or_404(staff_id)
        return serialize_staff(staff)

    @ns.expect(staff_model, validate=True)
    @ns.marshal_with(staff_model)
    def put(self, staff_id: int) -> dict[str, Any]:
        staff = Staff.query.get_or_404(staff_id)
        _apply_payload(staff, request.json or {})
        db.session.commit()
        return serialize_staff(staff)

    def delete(self, staff_id: int) -> tuple[dict[str, str], int]:
        staff = Staff.query.get_or_404(staff_id)
        db.session.delete(staff)
        db.session.commit()
        return {"status": "deleted"}, 204
