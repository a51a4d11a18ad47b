"""Room CRUD endpoints."""
from __future__ import annotations

from typing import Any

from flask import request
from flask_restx import Namespace, Resource, fields
from sqlalchemy.exc import IntegrityError

from ..extensions import db
from ..models import Room
from .parsing import NullableString


ns = Namespace("rooms", description="CRUD operations for therapy rooms")

room_model = ns.model(
    "Room",
    {
        "id": fields.Integer(readonly=True),
        "name": fields.String(required=True),
        "color": NullableString,
        "is_active": fields.Boolean(default=True),
    },
)


def serialize_room(room: Room) -> dict[str, Any]:
    return {
        "id": room.id,
        "name": room.name,
        "color": room.color,
        "is_active": room.is_active,
    }


def _commit_room(room: Room) -> None:
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        ns.abort(409, f"A room named {room.name!r} already exists")


@ns.route("")
class RoomList(Resource):
    @ns.marshal_list_with(room_model)
    def get(self) -> list[dict[str, Any]]:
        rooms = Room.query.order_by(Room.id).all()
        return [serialize_room(room) for room in rooms]

    @ns.expect(room_model, validate=True)
    @ns.marshal_with(room_model, code=201)
    def post(self) -> tuple[dict[str, Any], int]:
        payload = request.json or {}
        room = Room(
            name=payload["name"],
            color=payload.get("color"),
            is_active=payload.get("is_active", True),
        )
        db.session.add(room)
        _commit_room(room)
        return serialize_room(room), 201


@ns.route("/<int:room_id>")
class RoomResource(Resource):
    @ns.marshal_with(room_model)
    def get(self, room_id: int) -> dict[str, Any]:
        room = Room.query.get_or_404(room_id)
        return serialize_room(room)

    @ns.expect(room_model, validate=True)
    @ns.marshal_with(room_model)
    def put(self, room_id: int) -> dict[str, Any]:
        room = Room.query.get_or_404(room_id)
        payload = request.json or {}
        room.name = payload["name"]
        room.color = payload.get("color")
        room.is_active = payload.get("is_active", True)
        _commit_room(room)
        return serialize_room(room)

    def delete(self, room_id: int) -> tuple[dict[str, str], int]:
        room = Room.query.get_or_404(room_id)
        db.session.delete(room)
        db.session.commit()
        return {"status": "deleted"}, 204
