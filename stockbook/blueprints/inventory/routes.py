from __future__ import annotations

from flask import current_app as app, jsonify, request
from flask_login import current_user, login_required

from stockbook.models.inventory import MovementType
from stockbook.services.catalog import FILTER_MODES, ProductValidationError
from stockbook.services.context import get_store
from stockbook.services.pagination import get_page_args, paginate_sequence

from . import inventory_bp


def _payload():
    """Request fields from a JSON object body or a form; anything else reads as empty."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form


def _text_field(data, key, default=""):
    value = data.get(key)
    if value is None or isinstance(value, (dict, list)):
        return default
    return str(value).strip() or default


@inventory_bp.route("/products")
@login_required
def products():
    q = request.args.get("q", "").strip()
    filter_mode = request.args.get("filter", "all").strip().lower()
    if filter_mode not in FILTER_MODES:
        filter_mode = "all"

    app.logger.debug("Inventory search q=%s filter=%s", q, filter_mode)
    results = get_store().filter_products(q, filter_mode)
    return jsonify({
        "products": [p.to_dict() for p in results],
        "q": q,
        "filter": filter_mode,
        "count": len(results),
    })


@inventory_bp.route("/products", methods=["POST"])
@login_required
def add_product():
    data = _payload()
    try:
        product = get_store().add_product(data)
    except ProductValidationError as e:
        return jsonify({"success": False, "message": str(e)}), 400
    return jsonify({"success": True, "product": product.to_dict()}), 201


@inventory_bp.route("/products/<product_id>")
@login_required
def product_detail(product_id: str):
    store = get_store()
    p = store.get_product(product_id)
    if p is None:
        return jsonify({"success": False, "message": "Product not found."}), 404
    return jsonify({
        "product": p.to_dict(),
        "movements": [m.to_dict() for m in store.movements_for(product_id)[:20]],
    })


@inventory_bp.route("/products/<product_id>/move", methods=["POST"])
@login_required
def move_stock(product_id: str):
    """Stock IN/OUT for one product.

    Invalid quantities are dropped by the ledger; we report that as a 400
    without touching state.
    """
    data = _payload()
    store = get_store()
    if store.get_product(product_id) is None:
        return jsonify({"success": False, "message": "Product not found."}), 404

    movement_type = _text_field(data, "type").upper()
    if movement_type not in (MovementType.IN.value, MovementType.OUT.value):
        return jsonify({"success": False, "message": "Type must be IN or OUT."}), 400

    movement = store.apply_movement(
        product_id,
        data.get("quantity"),
        movement_type,
        _text_field(data, "reason", "Sale"),
        current_user._get_current_object(),
    )
    if movement is None:
        return jsonify({"success": False, "message": "Quantity must be a positive whole number."}), 400

    return jsonify({
        "success": True,
        "product": store.get_product(product_id).to_dict(),
        "movement": movement.to_dict(),
    })


@inventory_bp.route("/scan/<code>")
@login_required
def scan(code: str):
    """Barcode lookup used by the scanner."""
    p = get_store().find_by_barcode(code)
    if p is None:
        app.logger.info("Barcode lookup miss: %s", code)
        return jsonify({"success": False, "message": f"Product with barcode {code} not found."}), 404
    return jsonify({"success": True, "product": p.to_dict()})


@inventory_bp.route("/movements")
@login_required
def movements():
    """Movement history, most recent first."""
    product_id = request.args.get("product_id", "").strip()
    movement_type = request.args.get("type", "").strip().upper()
    page, per_page = get_page_args(default_per_page=app.config.get("MOVEMENTS_PER_PAGE", 20))

    rows = get_store().movements
    if product_id:
        rows = [m for m in rows if m.product_id == product_id]
    if movement_type:
        rows = [m for m in rows if m.type.value == movement_type]

    pagination = paginate_sequence(rows, page, per_page)
    return jsonify({
        "movements": [m.to_dict() for m in pagination.items],
        **pagination.meta(),
    })
