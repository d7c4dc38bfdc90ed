from flask import Blueprint

inventory_bp = Blueprint("inventory", __name__)
