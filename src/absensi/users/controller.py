from __future__ import annotations

import logging

from flask import Flask, flash, g, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.enums import SIGNUP_ROLES
from ..core.exceptions import AuthenticationError, ProfileWriteError, ValidationError
from ..identity.model import Identity
from .session import SessionContext, SessionState

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _current_identity() -> Identity | None:
        uid = session.get("uid")
        if not uid:
            return None
        return Identity(uid=uid, email=session.get("email", ""))

    def _remember(identity: Identity) -> None:
        session.clear()
        session["uid"] = identity.uid
        session["email"] = identity.email

    def _system_error(action: str, e: Exception) -> None:
        logger.exception("Unexpected error during %s", action)
        if bool(app.config.get("DEBUG", False)):
            flash(f"Kesalahan sistem saat {action}: {e}", "danger")
        else:
            flash(f"Kesalahan sistem saat {action}", "danger")

    def _log_transition(state: SessionState) -> None:
        if state.identity is None:
            return
        if state.profile is None:
            logger.warning("uid=%s is signed in without a profile", state.identity.uid)
        else:
            logger.debug("Session uid=%s role=%s", state.identity.uid, state.profile.role.value)

    @app.before_request
    def resolve_session():
        # Each request is one auth-state transition for this browser session.
        ctx = SessionContext(container.session_resolver).start()
        ctx.subscribe(_log_transition)
        g.session_context = ctx
        g.session_state = ctx.on_auth_state_changed(_current_identity())

    @app.teardown_request
    def close_session(exc=None):
        ctx = g.pop("session_context", None)
        if ctx is not None:
            ctx.close()

    @app.context_processor
    def inject_session():
        state = g.get("session_state")
        return {"profile": state.profile if state else None}

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if g.session_state.is_authenticated:
            return redirect(url_for("attendance"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")
            try:
                identity = container.auth_service.sign_in(email, password)
                _remember(identity)
                return redirect(url_for("attendance"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception as e:
                _system_error("masuk", e)

        return render_template("login.html", mode="login", email=request.form.get("email", ""))

    @app.route("/register", methods=["GET", "POST"], endpoint="register")
    def register_account():
        if g.session_state.is_authenticated:
            return redirect(url_for("attendance"))

        if request.method == "POST":
            try:
                identity = container.auth_service.sign_up(
                    name=request.form.get("name", ""),
                    email=request.form.get("email", ""),
                    password=request.form.get("password", ""),
                    role=request.form.get("role", "teacher"),
                )
                _remember(identity)
                return redirect(url_for("attendance"))
            except ProfileWriteError as e:
                # The provider already signed the new account in.
                _remember(e.identity)
                flash(str(e), "danger")
                return redirect(url_for("attendance"))
            except (AuthenticationError, ValidationError) as e:
                flash(str(e), "danger")
            except Exception as e:
                _system_error("mendaftar", e)

        return render_template(
            "login.html",
            mode="register",
            roles=SIGNUP_ROLES,
            email=request.form.get("email", ""),
            name=request.form.get("name", ""),
        )

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        return redirect(url_for("login"))
