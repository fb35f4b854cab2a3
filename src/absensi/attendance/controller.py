from __future__ import annotations

import logging

from flask import Flask, flash, g, redirect, render_template, request, url_for

from ..common.datetime_utils import format_clock, format_long_date, now_local
from ..common.decorators import login_required
from ..container import Container
from ..core.constants import DEFAULT_LOCATION_TIMEOUT_SECONDS
from ..core.enums import MANUAL_STATUSES
from ..core.exceptions import DomainError, StoreError
from .location import capture_location, form_location_provider

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/attendance", endpoint="attendance")
    @login_required
    def attendance():
        state = g.session_state
        try:
            history = container.attendance_service.get_history_ui(state.identity.uid)
        except StoreError:
            logger.exception("Fetch history failed for uid=%s", state.identity.uid)
            history = []

        now = now_local(container.tz)
        return render_template(
            "attendance.html",
            history=history,
            clock=format_clock(now),
            long_date=format_long_date(now),
            manual_statuses=[s.value for s in MANUAL_STATUSES],
            active_page="attendance",
        )

    @app.route("/attendance/checkin", methods=["POST"], endpoint="checkin")
    @login_required
    def checkin():
        state = g.session_state
        status_override = (request.form.get("status") or "").strip() or None
        location = capture_location(
            form_location_provider(request.form),
            timeout=DEFAULT_LOCATION_TIMEOUT_SECONDS,
        )

        try:
            result = container.attendance_service.check_in(
                identity=state.identity,
                profile=state.profile,
                location=location,
                status_override=status_override,
            )
            flash(result.message, "success")
        except DomainError as e:
            flash(str(e), "danger")
        except Exception as e:
            logger.exception("Check-in failed for uid=%s", state.identity.uid)
            flash(str(e) or "Gagal melakukan absensi", "danger")
        return redirect(url_for("attendance"))
