"""Sign-in providers.

``sign_in`` is the identity-provider boundary used by
:func:`dashboard.actions.authenticate`.  Providers return the authorised
:class:`~dashboard.models.User` or raise an :class:`~dashboard.errors.AuthError`.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping
from urllib.parse import urlparse

from flask_login import login_user
from werkzeug.security import check_password_hash

from dashboard import INVOICES_PATH
from dashboard.errors import AccessDenied, CredentialsSignin
from dashboard.models import User
from dashboard.schemas import LoginSchema, safe_parse
from dashboard.state import Redirect
from dashboard.utils.activity import log_activity


def authorize_credentials(form_data: Mapping[str, Any]) -> User:
    result = safe_parse(LoginSchema, form_data)
    if not result.success:
        raise CredentialsSignin()

    user = User.query.filter_by(email=result.data["email"]).first()
    if not user or not check_password_hash(user.password, result.data["password"]):
        raise CredentialsSignin()
    if not user.active:
        raise AccessDenied(message="Please contact system admin to activate account.")
    return user


PROVIDERS: Dict[str, Callable[[Mapping[str, Any]], User]] = {
    "credentials": authorize_credentials,
}


def _redirect_target(value) -> str:
    """Return ``value`` when it is a same-site path, else the invoice list."""
    if value:
        target = str(value).replace("\\", "")
        parsed = urlparse(target)
        if (
            not parsed.scheme
            and not parsed.netloc
            and target.startswith("/")
            and not target.startswith("//")
        ):
            return target
    return INVOICES_PATH


def sign_in(provider: str, form_data: Mapping[str, Any]) -> Redirect:
    """Authorise ``form_data`` with ``provider`` and start a session."""
    try:
        authorize = PROVIDERS[provider]
    except KeyError:
        raise ValueError(f"Unknown sign-in provider: {provider}") from None

    user = authorize(form_data)
    login_user(user)
    log_activity("Logged in", user.id)
    return Redirect(_redirect_target(form_data.get("redirect_to")))
