from flask import Blueprint, jsonify, request

from mehendi import get_state
from mehendi.content import SERVICES
from mehendi.errors import NotFoundError, create_success_response
from mehendi.state.entities import Product

public_bp = Blueprint("public", __name__)


@public_bp.route("/")
def home():
    state = get_state()
    categories = [c.to_dict() for c in state.categories.items]
    return jsonify(create_success_response({"categories": categories, "services": SERVICES}))


@public_bp.route("/categories")
def categories():
    state = get_state()
    return jsonify(create_success_response([c.to_dict() for c in state.categories.items]))


@public_bp.route("/category/<category_id>")
def category_detail(category_id):
    state = get_state()
    found = state.categories.find(lambda c: c.id == category_id)
    if not found:
        raise NotFoundError("Category not found")
    products = [p.to_dict() for p in state.products_in(category_id)]
    return jsonify(create_success_response({"category": found[0].to_dict(), "products": products}))


@public_bp.route("/gallery")
@public_bp.route("/gallery/<category_id>")
def gallery(category_id=None):
    # Straight from the backend, the snapshot is not used here
    rows = get_state().catalog.list_products(category_id)
    return jsonify(create_success_response([Product.from_row(row).to_dict() for row in rows]))


@public_bp.route("/services")
def services():
    return jsonify(create_success_response(SERVICES))


@public_bp.route("/contact", methods=["POST"])
def contact():
    data = request.get_json(silent=True) or request.form.to_dict()
    submission = get_state().add_contact(data).unwrap()
    return jsonify(create_success_response(submission.to_dict())), 201
