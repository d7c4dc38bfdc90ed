"""
Authentication routes (login/logout)

Login matches the email against the static user list and the password
against the shared DEMO_PASSWORD. This is a convenience gate, not security.
"""
from flask import current_app, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user

from stockbook.blueprints.auth import auth_bp
from stockbook.models.user import find_user_by_email
from stockbook.services.context import get_users
from stockbook.services.security import is_valid_email, log_security_event, rate_limit, rate_limiter


@auth_bp.route('/login', methods=['POST'])
@rate_limit()
def login():
    """User login"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = request.form
    email = data.get('email')
    email = email.strip() if isinstance(email, str) else ''
    password = data.get('password')
    if not isinstance(password, str):
        password = ''
    remember = bool(data.get('remember', False))

    if not email or not password:
        log_security_event('login_attempt_empty', username=email, ip_address=request.remote_addr)
        return jsonify({'success': False, 'message': 'Please enter both email and password.'}), 400

    if not is_valid_email(email):
        log_security_event('login_failed', username=email, ip_address=request.remote_addr, details='Malformed email')
        return jsonify({'success': False, 'message': 'Invalid credentials'}), 401

    user = find_user_by_email(get_users(), email)
    if user is None or password != current_app.config['DEMO_PASSWORD']:
        log_security_event('login_failed', username=email, ip_address=request.remote_addr, details='Invalid credentials')
        return jsonify({'success': False, 'message': 'Invalid credentials'}), 401

    login_user(user, remember=remember)
    rate_limiter.reset(request.remote_addr)
    log_security_event('login_success', user_id=user.id, username=email, ip_address=request.remote_addr)
    return jsonify({'success': True, 'user': user.to_dict()})


@auth_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    """User logout"""
    if current_user.is_authenticated:
        log_security_event('logout', user_id=current_user.id, username=current_user.email, ip_address=request.remote_addr)
    logout_user()
    return jsonify({'success': True, 'message': 'You have been logged out.'})


@auth_bp.route('/me')
@login_required
def me():
    return jsonify({'user': current_user.to_dict()})
