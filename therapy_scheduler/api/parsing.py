"""Payload helpers shared by the API namespaces."""
from __future__ import annotations

from datetime import time
from typing import Any

from flask_restx import Namespace, fields

from ..models import parse_time as parse_clock
from ..scheduling import WeekDay


class NullableString(fields.String):
    """String field that also accepts JSON null in validated payloads."""

    __schema_type__ = ["string", "null"]


def parse_time(ns: Namespace, value: Any, field: str) -> time:
    try:
        return parse_clock(str(value))
    except (TypeError, ValueError):
        ns.abort(400, f"{field} must be a time formatted as HH:MM")


def parse_optional_time(ns: Namespace, value: Any, field: str) -> time | None:
    if value in (None, ""):
        return None
    return parse_time(ns, value, field)


def parse_weekday(ns: Namespace, value: Any) -> WeekDay:
    try:
        return WeekDay.parse(value)
    except ValueError as exc:
        ns.abort(400, str(exc))
