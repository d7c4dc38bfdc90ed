from flask import Blueprint

backup_bp = Blueprint("backup", __name__)
