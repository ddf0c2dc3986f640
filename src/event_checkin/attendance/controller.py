from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..roster.controller import person_json


def register(app: Flask, container: Container) -> None:
    ledger = container.ledger

    @app.route("/checkin", methods=["POST"], endpoint="checkin")
    async def checkin():
        payload = request.get_json(silent=True) or {}
        person = await ledger.check_in(str(payload.get("person_id") or ""))
        return jsonify({"checked_in": person_json(person)})

    @app.route("/attendance/dates", methods=["GET"], endpoint="attendance_dates")
    async def attendance_dates():
        newest_first = request.args.get("order", "desc") != "asc"
        dates = await ledger.list_dates(newest_first=newest_first)
        default = max(dates) if dates else None
        return jsonify({"dates": dates, "default": default})

    @app.route("/attendance/<day>", methods=["GET"], endpoint="attendance_for_date")
    async def attendance_for_date(day: str):
        people = await ledger.attendee_details(day)
        return jsonify({"date": day, "attendees": [person_json(p) for p in people]})
