from flask import Blueprint, jsonify, request

from blog_api.auth import auth_required
from blog_api.routes.request_body import read_body
from blog_api.services import auth_service, user_service


user_bp = Blueprint("users", __name__)


@user_bp.route("/register", methods=["POST"])
def register():
    data = read_body()
    message = auth_service.register(
        data.get("name"),
        data.get("email"),
        data.get("password"),
        data.get("password2"),
    )
    return jsonify(message), 201


@user_bp.route("/login", methods=["POST"])
def login():
    data = read_body()
    return jsonify(auth_service.login(data.get("email"), data.get("password"))), 200


@user_bp.route("/<int:user_id>", methods=["GET"])
def get_user(user_id):
    return jsonify(user_service.get_user(user_id)), 200


@user_bp.route("/change-avatar", methods=["POST"])
@auth_required
def change_avatar(identity):
    return jsonify(user_service.change_avatar(identity, request.files.get("avatar"))), 200


@user_bp.route("/edit", methods=["POST"])
@auth_required
def edit_user(identity):
    data = read_body()
    user = user_service.edit_user(
        identity,
        name=data.get("name"),
        email=data.get("email"),
        current_password=data.get("currentPassword"),
        new_password=data.get("newPassword"),
        confirm_new_password=data.get("confirmNewPassword"),
    )
    return jsonify(user), 200


@user_bp.route("/get-authors", methods=["GET"])
def get_authors():
    return jsonify(user_service.get_authors()), 200
