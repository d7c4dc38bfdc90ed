"""
Backup, restore and export routes
"""
from __future__ import annotations

import json
from datetime import date

from flask import Response, current_app, jsonify, request
from flask_login import login_required

from stockbook.models.seed import now_ms
from stockbook.services.backup import BackupError, backup_filename, build_backup, csv_filename, export_csv
from stockbook.services.context import get_store, get_users
from stockbook.services.excel_service import InventoryExcelService

from . import backup_bp


@backup_bp.route("/export")
@login_required
def export_backup():
    """Full JSON snapshot as a file download"""
    store = get_store()
    payload = build_backup(store.products, store.movements, get_users())
    filename = backup_filename(now_ms(), prefix=current_app.config.get("BACKUP_PREFIX", "backup_v254"))
    return Response(json.dumps(payload), mimetype="application/json", headers={
        "Content-Disposition": f"attachment; filename={filename}"
    })


@backup_bp.route("/restore", methods=["POST"])
@login_required
def restore_backup():
    """Restore from an uploaded .json file (field ``file``) or a raw JSON body.

    A bad file leaves the current collections untouched.
    """
    upload = request.files.get("file")
    if upload is not None:
        if upload.filename and not upload.filename.lower().endswith(".json"):
            return jsonify({"success": False, "message": "Backup must be a .json file."}), 400
        raw = upload.read()
    else:
        raw = request.get_data()

    if not raw:
        return jsonify({"success": False, "message": "No backup file provided."}), 400

    try:
        get_store().restore_backup(raw)
    except BackupError as e:
        current_app.logger.warning("Restore rejected: %s", e)
        return jsonify({"success": False, "message": "Invalid backup file"}), 400

    return jsonify({"success": True, "message": "Data restored successfully!"})


@backup_bp.route("/csv")
@login_required
def export_inventory_csv():
    output = export_csv(get_store().products)
    return Response(output, mimetype="text/csv", headers={
        "Content-Disposition": f"attachment; filename={csv_filename()}"
    })


@backup_bp.route("/xlsx")
@login_required
def export_inventory_xlsx():
    store = get_store()
    top_n = current_app.config.get("BEST_SELLERS_TOP_N", 3)
    content = InventoryExcelService.create_report(
        store.products, store.movements, store.stats(), store.best_sellers(top_n=top_n),
    )
    filename = InventoryExcelService.generate_filename(date.today())
    return Response(
        content,
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
