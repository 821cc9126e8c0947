from flask import current_app, jsonify, request

from linksaver.auth import auth_bp
from linksaver.errors import AuthError
from linksaver.services import auth


@auth_bp.route("/register", methods=["POST"])
def register():
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        payload = {}
    user = auth.register(payload)
    current_app.logger.info("Registered user %s", user.id)
    return jsonify({"success": True}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        payload = {}
    try:
        token = auth.login(payload)
    except AuthError:
        current_app.logger.info("Rejected login attempt")
        raise
    return jsonify({"token": token})
