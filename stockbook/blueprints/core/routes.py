"""
Core routes (health, dashboard)
"""
from flask import current_app, jsonify
from flask_login import login_required
from sqlalchemy import text

from stockbook.blueprints.core import core_bp
from stockbook.extensions import db
from stockbook.models.seed import now_ms
from stockbook.services.context import get_store


@core_bp.route('/health')
def health():
    """Health check endpoint for monitoring and load balancers"""
    try:
        db.session.execute(text('SELECT 1'))
        return jsonify({'status': 'healthy', 'message': 'Application is running'}), 200
    except Exception as e:
        current_app.logger.error("Health check failed: %s", e)
        return jsonify({'status': 'unhealthy', 'message': str(e)}), 503


@core_bp.route('/')
@core_bp.route('/dashboard')
@login_required
def dashboard():
    """Dashboard aggregates, best sellers and the low-stock shortlist"""
    store = get_store()
    now = now_ms()
    top_n = current_app.config.get('BEST_SELLERS_TOP_N', 3)
    return jsonify({
        'stats': store.stats(now=now).to_dict(),
        'bestSellers': [b.to_dict() for b in store.best_sellers(top_n=top_n)],
        'lowStock': [p.to_dict() for p in store.filter_products('', 'low', now=now)],
        'recentMovements': [m.to_dict() for m in store.movements[:5]],
    })
