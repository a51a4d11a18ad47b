"""Recurring activity endpoints (meals, meetings and other blocked periods)."""
from __future__ import annotations

from typing import Any

from flask import request
from flask_restx import Namespace, Resource, fields

from ..extensions import db
from ..models import Activity, ActivityDayOverride, format_time
from ..scheduling import WEEK_DAYS
from .parsing import NullableString, parse_optional_time, parse_weekday


ns = Namespace("activities", description="Recurring activities that may block sessions")

override_model = ns.model(
    "ActivityDayOverride",
    {
        "weekday": fields.String(required=True, enum=[day.value for day in WEEK_DAYS]),
        "start_time": NullableString(description="HH:MM, empty when not held that day"),
        "end_time": NullableString(description="HH:MM, empty when not held that day"),
    },
)

activity_model = ns.model(
    "Activity",
    {
        "id": fields.Integer(readonly=True),
        "name": fields.String(required=True),
        "color": NullableString,
        "default_start_time": NullableString(description="HH:MM"),
        "default_end_time": NullableString(description="HH:MM"),
        "is_blocking": fields.Boolean(default=True),
        "is_active": fields.Boolean(default=True),
        "day_overrides": fields.List(fields.Nested(override_model)),
    },
)


def serialize_activity(activity: Activity) -> dict[str, Any]:
    return {
        "id": activity.id,
        "name": activity.name,
        "color": activity.color,
        "default_start_time": format_time(activity.default_start),
        "default_end_time": format_time(activity.default_end),
        "is_blocking": activity.is_blocking,
        "is_active": activity.is_active,
        "day_overrides": [
            {
                "weekday": entry.weekday,
                "start_time": format_time(entry.start_time),
                "end_time": format_time(entry.end_time),
            }
            for entry in activity.day_overrides
        ],
    }


def _apply_payload(activity: Activity, payload: dict[str, Any]) -> None:
    if not payload.get("name"):
        ns.abort(400, "name is required")
    default_start = parse_optional_time(ns, payload.get("default_start_time"), "default_start_time")
    default_end = parse_optional_time(ns, payload.get("default_end_time"), "default_end_time")
    if (default_start is None) != (default_end is None):
        ns.abort(400, "default_start_time and default_end_time must be given together")
    if default_start is not None and default_end <= default_start:
        ns.abort(400, "default_end_time must be after default_start_time")
    overrides = _parse_overrides(payload.get("day_overrides") or [])

    activity.name = payload["name"]
    activity.color = payload.get("color")
    activity.default_start = default_start
    activity.default_end = default_end
    activity.is_blocking = payload.get("is_blocking", True)
    activity.is_active = payload.get("is_active", True)
    activity.day_overrides.clear()
    db.session.flush()
    activity.day_overrides.extend(overrides)


def _parse_overrides(payload: list[dict[str, Any]]) -> list[ActivityDayOverride]:
    entries: dict[str, ActivityDayOverride] = {}
    for item in payload:
        weekday = parse_weekday(ns, item.get("weekday"))
        start = parse_optional_time(ns, item.get("start_time"), "start_time")
        end = parse_optional_time(ns, item.get("end_time"), "end_time")
        if (start is None) != (end is None):
            ns.abort(400, f"Override for {weekday.value} needs both times or neither")
        if start is not None and end <= start:
            ns.abort(400, f"Override for {weekday.value} must end after it starts")
        entries[weekday.value] = ActivityDayOverride(
            weekday=weekday.value, start_time=start, end_time=end
        )
    return list(entries.values())


@ns.route("")
class ActivityList(Resource):
    @ns.marshal_list_with(activity_model)
    def get(self) -> list[dict[str, Any]]:
        activities = Activity.query.order_by(Activity.id).all()
        return [serialize_activity(activity) for activity in activities]

    @ns.expect(activity_model, validate=True)
    @ns.marshal_with(activity_model, code=201)
    def post(self) -> tuple[dict[str, Any], int]:
        activity = Activity()
        _apply_payload(activity, request.json or {})
        db.session.add(activity)
        db.session.commit()
        return serialize_activity(activity), 201


@ns.route("/<int:activity_id>")
class ActivityResource(Resource):
    @ns.marshal_with(activity_model)
    def get(self, activity_id: int) -> dict[str, Any]:
        activity = Activity.query.get_or_404(activity_id)
        return serialize_activity(activity)

    @ns.expect(activity_model, validate=True)
    @ns.marshal_with(activity_model)
    def put(self, activity_id: int) -> dict[str, Any]:
        activity = Activity.query.get_or_404(activity_id)
        _apply_payload(activity, request.json or {})
        db.session.commit()
        return serialize_activity(activity)

    def delete(self, activity_id: int) -> tuple[dict[str, str], int]:
        activity = Activity.query.get_or_404(activity_id)
        db.session.delete(activity)
        db.session.commit()
        return {"status": "deleted"}, 204
