from flask import Blueprint, jsonify, request

from blog_api.auth import auth_required
from blog_api.routes.request_body import read_body
from blog_api.services import post_service


post_bp = Blueprint("posts", __name__)


@post_bp.route("", methods=["POST"])
@auth_required
def create_post(identity):
    data = read_body()
    post = post_service.create_post(
        identity,
        data.get("title"),
        data.get("category"),
        data.get("description"),
        request.files.get("thumbnail"),
    )
    return jsonify(post), 201


@post_bp.route("", methods=["GET"])
def list_posts():
    return jsonify(post_service.get_posts()), 200


@post_bp.route("/<int:post_id>", methods=["GET"])
def get_post(post_id):
    return jsonify(post_service.get_post(post_id)), 200


@post_bp.route("/categories/<category>", methods=["GET"])
def list_category_posts(category):
    return jsonify(post_service.get_category_posts(category)), 200


@post_bp.route("/users/<int:user_id>", methods=["GET"])
def list_user_posts(user_id):
    return jsonify(post_service.get_user_posts(user_id)), 200


@post_bp.route("/<int:post_id>", methods=["PATCH"])
@auth_required
def edit_post(identity, post_id):
    data = read_body()
    post = post_service.edit_post(
        identity,
        post_id,
        data.get("title"),
        data.get("category"),
        data.get("description"),
        request.files.get("thumbnail"),
    )
    return jsonify(post), 200


@post_bp.route("/<int:post_id>", methods=["DELETE"])
@auth_required
def delete_post(identity, post_id):
    return jsonify(post_service.delete_post(identity, post_id)), 200
