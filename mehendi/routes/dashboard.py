from flask import Blueprint, jsonify, request
from flask_login import login_required

from mehendi import get_state
from mehendi.errors import create_success_response
from mehendi.utils.file_rules import ImageUpload

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


def _image_from_request():
    return ImageUpload.from_file_storage(request.files.get("image"))


@dashboard_bp.route("/")
@login_required
def panel():
    state = get_state()
    return jsonify(create_success_response({
        "stats": state.stats(),
        "categories": [c.to_dict() for c in state.categories.items],
        "recent_contacts": [c.to_dict() for c in state.contacts.items[-5:]],
    }))


@dashboard_bp.route("/refresh", methods=["POST"])
@login_required
def refresh():
    state = get_state()
    state.refresh().unwrap()
    return jsonify(create_success_response(state.stats()))


# Categories

@dashboard_bp.route("/categories")
@login_required
def list_categories():
    state = get_state()
    return jsonify(create_success_response([c.to_dict() for c in state.categories.items]))


@dashboard_bp.route("/categories", methods=["POST"])
@login_required
def create_category():
    category = get_state().add_category(request.form.get("name"), _image_from_request()).unwrap()
    return jsonify(create_success_response(category.to_dict())), 201


@dashboard_bp.route("/categories/<category_id>/edit", methods=["POST"])
@login_required
def edit_category(category_id):
    category = get_state().update_category(
        category_id, request.form.get("name"), _image_from_request()
    ).unwrap()
    return jsonify(create_success_response(category.to_dict()))


@dashboard_bp.route("/categories/<category_id>/delete", methods=["POST"])
@login_required
def delete_category(category_id):
    deletion = get_state().delete_category(category_id).unwrap()
    suffix = " (including images from storage)" if deletion.storage_cleaned else " (some images may remain in storage)"
    return jsonify(create_success_response({
        "category": deletion.row,
        "deleted_products": deletion.deleted_products,
        "storage_cleaned": deletion.storage_cleaned,
        "message": (
            f'Category "{deletion.row["name"]}" and {deletion.deleted_products} related products '
            f"have been deleted successfully{suffix}"
        ),
    }))


# Products

@dashboard_bp.route("/products")
@login_required
def list_products():
    state = get_state()
    category_id = request.args.get("category_id")
    products = state.products_in(category_id) if category_id else state.products.items
    return jsonify(create_success_response([p.to_dict() for p in products]))


@dashboard_bp.route("/products", methods=["POST"])
@login_required
def create_product():
    product = get_state().add_product(
        request.form.get("name"), request.form.get("category_id"), _image_from_request()
    ).unwrap()
    return jsonify(create_success_response(product.to_dict())), 201


@dashboard_bp.route("/products/<product_id>/edit", methods=["POST"])
@login_required
def edit_product(product_id):
    product = get_state().update_product(
        product_id, request.form.get("name"), request.form.get("category_id"), _image_from_request()
    ).unwrap()
    return jsonify(create_success_response(product.to_dict()))


@dashboard_bp.route("/products/<product_id>/delete", methods=["POST"])
@login_required
def delete_product(product_id):
    deletion = get_state().delete_product(product_id).unwrap()
    return jsonify(create_success_response({
        "product": deletion.row,
        "storage_cleaned": deletion.storage_cleaned,
    }))


# Inquiries

@dashboard_bp.route("/contacts")
@login_required
def list_contacts():
    state = get_state()
    return jsonify(create_success_response([c.to_dict() for c in state.contacts.items]))


@dashboard_bp.route("/contacts/<contact_id>/delete", methods=["POST"])
@login_required
def delete_contact(contact_id):
    contact = get_state().delete_contact(contact_id).unwrap()
    return jsonify(create_success_response(contact.to_dict()))
