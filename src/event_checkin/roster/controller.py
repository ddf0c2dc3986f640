from __future__ import annotations

from dataclasses import asdict

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import StoreError, ValidationError
from .model import Person, new_person


def person_json(person: Person) -> dict:
    return asdict(person)


def _person_from_payload(payload: dict, *, person_id: str | None = None) -> Person:
    return new_person(
        person_id=person_id or payload.get("id"),
        name=str(payload.get("name") or ""),
        email=str(payload.get("email") or ""),
        subteam=str(payload.get("subteam") or ""),
        grade=str(payload.get("grade") or ""),
        student_id=str(payload.get("student_id") or payload.get("studentId") or ""),
    )


def register(app: Flask, container: Container) -> None:
    roster = container.roster

    @app.route("/roster", methods=["GET"], endpoint="roster_search")
    def roster_search():
        query = request.args.get("q", "")
        limit = request.args.get("limit", type=int)
        if query.strip():
            people = roster.search(query, limit=limit)
        else:
            people = list(roster.get())
        return jsonify({"query": query, "results": [person_json(p) for p in people]})

    @app.route("/roster/refresh", methods=["POST"], endpoint="roster_refresh")
    async def roster_refresh():
        if not await roster.refresh():
            raise StoreError("roster refresh failed")
        return jsonify({"people": len(roster.get())})

    @app.route("/roster", methods=["POST"], endpoint="roster_add")
    async def roster_add():
        person = _person_from_payload(request.get_json(silent=True) or {})
        if roster.get_by_id(person.id):
            raise ValidationError(f"Person {person.id!r} already exists")
        if not await roster.add(person):
            raise StoreError(f"could not add {person.id}")
        return jsonify(person_json(person)), 201

    @app.route("/roster/<person_id>", methods=["PUT"], endpoint="roster_update")
    async def roster_update(person_id: str):
        person = _person_from_payload(request.get_json(silent=True) or {}, person_id=person_id)
        if not await roster.update(person):
            raise StoreError(f"could not update {person_id}")
        return jsonify(person_json(person))

    @app.route("/roster/<person_id>", methods=["DELETE"], endpoint="roster_delete")
    async def roster_delete(person_id: str):
        if not await roster.delete(person_id):
            raise StoreError(f"could not delete {person_id}")
        return "", 204
