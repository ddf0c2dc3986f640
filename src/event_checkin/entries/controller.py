from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from .model import Entry


def entry_json(entry: Entry) -> dict:
    return {"id": entry.entry_id, "name": entry.name, "date": entry.formatted_date}


def register(app: Flask, container: Container) -> None:
    log = container.entry_log

    @app.route("/entries", methods=["POST"], endpoint="entries_add")
    async def entries_add():
        payload = request.get_json(silent=True) or {}
        entry = await log.add(str(payload.get("name") or ""))
        return jsonify(entry_json(entry)), 201

    @app.route("/entries", methods=["GET"], endpoint="entries_list")
    async def entries_list():
        return jsonify({"entries": [entry_json(e) for e in await log.list()]})

    @app.route("/entries/<entry_id>", methods=["PUT"], endpoint="entries_rename")
    async def entries_rename(entry_id: str):
        payload = request.get_json(silent=True) or {}
        entry = await log.rename(entry_id, str(payload.get("name") or ""))
        return jsonify(entry_json(entry))

    @app.route("/entries/<entry_id>", methods=["DELETE"], endpoint="entries_delete")
    async def entries_delete(entry_id: str):
        await log.delete(entry_id)
        return "", 204

    @app.route("/entries", methods=["DELETE"], endpoint="entries_clear")
    async def entries_clear():
        return jsonify({"deleted": await log.clear()})

    @app.route("/entries.csv", methods=["GET"], endpoint="entries_csv")
    async def entries_csv():
        text = await log.export_csv()
        return app.response_class(
            text.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=entries.csv"},
        )
