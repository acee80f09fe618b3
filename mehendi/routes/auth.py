from flask import Blueprint, jsonify, request
from flask_login import login_required, login_user, logout_user

from mehendi import get_state
from mehendi.errors import create_success_response

auth_bp = Blueprint("auth", __name__, url_prefix="/admin")


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    state = get_state()

    if state.login(data.get("email"), data.get("password")):
        login_user(state.admin_user)
        return jsonify(create_success_response({"email": state.admin_user.email}))

    return jsonify({"success": False, "data": None, "error": "Invalid email or password"}), 401


@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    get_state().logout()
    logout_user()
    return jsonify(create_success_response(None))
