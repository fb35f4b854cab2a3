from __future__ import annotations

from functools import wraps

from flask import flash, g, redirect, render_template, url_for


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        state = g.get("session_state")
        if state is None or not state.is_authenticated:
            flash("Silakan masuk terlebih dahulu.", "warning")
            return redirect(url_for("login"))
        return view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        state = g.get("session_state")
        if state is None or not state.is_authenticated:
            return redirect(url_for("login"))

        if not state.profile.is_admin:
            return render_template("403.html", profile=state.profile), 403

        return view(*args, **kwargs)

    return wrapper
