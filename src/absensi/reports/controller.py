from __future__ import annotations

from flask import Flask, flash, g, render_template, request

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.decorators import admin_required
from ..container import Container
from ..core.exceptions import ValidationError
from .service import DashboardData, tally


def register(app: Flask, container: Container) -> None:
    service = container.dashboard_service

    def _requested_range() -> tuple[str, str]:
        today_start, today_end = service.default_range(now_local(container.tz))
        start = (request.args.get("start") or "").strip() or today_start
        end = (request.args.get("end") or "").strip() or today_end
        return start, end

    def _load(viewer_uid: str, start: str, end: str) -> DashboardData:
        try:
            data = service.build_dashboard(viewer_uid=viewer_uid, start=start, end=end)
        except ValidationError as e:
            flash(str(e), "danger")
            return service.last_loaded(viewer_uid) or DashboardData(*service.default_range(now_local(container.tz)))
        if data.error:
            flash(data.error, "danger")
        return data

    @app.route("/admin", endpoint="admin_dashboard")
    @admin_required
    def admin_dashboard():
        start, end = _requested_range()
        data = _load(g.session_state.identity.uid, start, end)
        return render_template(
            "admin/dashboard.html",
            start=data.start,
            end=data.end,
            rows=service.table_rows(data),
            stats=tally(data.records),
            active_page="admin",
        )

    @app.route("/admin/export.csv", endpoint="admin_export_csv")
    @admin_required
    def admin_export_csv():
        viewer_uid = g.session_state.identity.uid
        start, end = _requested_range()
        try:
            data = service.loaded_for(
                viewer_uid,
                start=parse_iso_date(start).strftime("%Y-%m-%d"),
                end=parse_iso_date(end).strftime("%Y-%m-%d"),
            )
        except ValidationError:
            data = None
        if data is None:
            # This process has not shown that range (other worker, restart): load it.
            data = _load(viewer_uid, start, end)

        return app.response_class(
            service.export_csv(data),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={service.export_filename(data)}"},
        )
