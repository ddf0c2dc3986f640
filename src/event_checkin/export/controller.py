from __future__ import annotations

from datetime import date

from flask import Flask

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/export.csv", methods=["GET"], endpoint="export_csv")
    async def export_csv():
        text = await container.export_service.export_csv()
        filename = f"attendance_export_{date.today().strftime('%Y%m%d')}.csv"
        return app.response_class(
            text.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
