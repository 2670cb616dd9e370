from flask import (
    Blueprint,
    current_app,
    redirect,
    render_template,
    request,
    url_for,
)
from flask_login import current_user, login_required, logout_user

from dashboard import limiter
from dashboard.actions import authenticate
from dashboard.state import Redirect
from dashboard.utils.activity import log_activity

auth = Blueprint("auth", __name__)


@auth.route("/login", methods=["GET", "POST"])
@limiter.limit("5 per minute")
def login():
    """Authenticate a user and start their session."""
    message = None
    if request.method == "POST":
        result = authenticate(message, request.form)
        if isinstance(result, Redirect):
            return redirect(result.location)
        message = result

    return render_template(
        "auth/login.html",
        message=message,
        email=request.form.get("email", ""),
        redirect_to=request.values.get("redirect_to") or request.args.get("next", ""),
        demo=current_app.config["DEMO"],
    )


@auth.route("/logout")
@login_required
def logout():
    """Log the current user out."""
    user_id = current_user.id
    logout_user()
    log_activity("Logged out", user_id)
    return redirect(url_for("auth.login"))
