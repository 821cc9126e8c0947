from functools import wraps

from flask import g
from flask_login import current_user

from linksaver.errors import AuthError
from linksaver.extensions import db, login_manager
from linksaver.models import User
from linksaver.services.auth import verify


def bearer_token(auth_header: str | None):
    auth_header = auth_header or ""
    if not auth_header.startswith("Bearer "):
        return None
    token = auth_header.removeprefix("Bearer ").strip()
    return token or None


@login_manager.request_loader
def load_user_from_request(request):
    user_id = verify(bearer_token(request.headers.get("Authorization")))
    if user_id is None:
        return None
    return db.session.get(User, user_id)


def api_auth_required(func):
    @wraps(func)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated:
            raise AuthError("Unauthorized")
        g.api_user = current_user._get_current_object()
        return func(*args, **kwargs)

    return wrapped
