"""
Security utilities for the Stockbook inventory service

Login rate limiting and the security audit log
"""
import re
from functools import wraps
from flask import request, abort, current_app
from datetime import datetime, timedelta


# ============================================================================
# Input Validation
# ============================================================================

def is_valid_email(email):
    """Validate email format"""
    if not email or not isinstance(email, str):
        return False
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))


# ============================================================================
# Rate Limiting
# ============================================================================

class RateLimiter:
    """Simple in-memory rate limiter"""

    def __init__(self):
        self.attempts = {}  # {identifier: [(timestamp, count)]}

    def is_allowed(self, identifier, max_attempts=5, window_seconds=300):
        """
        Check if request is allowed

        Returns:
            (allowed: bool, remaining: int, reset_time: int-seconds)
        """
        now = datetime.utcnow()
        cutoff = now - timedelta(seconds=window_seconds)
        self._prune(cutoff)

        if identifier not in self.attempts:
            self.attempts[identifier] = []

        # Remove old attempts outside window
        self.attempts[identifier] = [
            (ts, count) for ts, count in self.attempts[identifier]
            if ts > cutoff
        ]

        current_attempts = sum(count for _, count in self.attempts[identifier])

        if current_attempts >= max_attempts:
            oldest = self.attempts[identifier][0][0]
            reset_time = int((oldest + timedelta(seconds=window_seconds) - now).total_seconds())
            return False, 0, max(0, reset_time)

        # Record this attempt
        if not self.attempts[identifier] or self.attempts[identifier][-1][0] < now:
            self.attempts[identifier].append((now, 1))
        else:
            ts, count = self.attempts[identifier][-1]
            self.attempts[identifier][-1] = (ts, count + 1)

        remaining = max_attempts - current_attempts - 1
        return True, remaining, 0

    def _prune(self, cutoff):
        """Forget identifiers with no attempts left inside the window"""
        stale = [key for key, entries in self.attempts.items()
                 if all(ts <= cutoff for ts, _ in entries)]
        for key in stale:
            del self.attempts[key]

    def reset(self, identifier):
        """Reset rate limit for identifier"""
        self.attempts.pop(identifier, None)


# Global rate limiter
rate_limiter = RateLimiter()


def rate_limit(max_attempts=None, window_seconds=None, key_func=None):
    """
    Decorator for rate limiting

    Args:
        max_attempts: Max requests allowed (default: LOGIN_MAX_ATTEMPTS)
        window_seconds: Time window (default: LOGIN_WINDOW_SECONDS)
        key_func: Function to extract identifier from request
                  Default: uses client IP
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            identifier = key_func() if key_func else request.remote_addr
            limit = max_attempts or current_app.config.get('LOGIN_MAX_ATTEMPTS', 5)
            window = window_seconds or current_app.config.get('LOGIN_WINDOW_SECONDS', 300)

            allowed, remaining, reset_time = rate_limiter.is_allowed(identifier, limit, window)

            if not allowed:
                log_security_event('rate_limited', ip_address=identifier, details=f'retry in {reset_time}s')
                abort(429)

            return f(*args, **kwargs)
        return decorated_function
    return decorator


# ============================================================================
# Audit Logging
# ============================================================================

def log_security_event(event_type, user_id=None, username=None, ip_address=None, details=None):
    """
    Log security events for audit trail

    Args:
        event_type: Type of event (login_success, login_failed, logout, ...)
        user_id: User ID if applicable
        username: Login identifier if applicable
        ip_address: Client IP address
        details: Additional details
    """
    if not ip_address:
        ip_address = request.remote_addr if request else 'unknown'

    audit_message = {
        'timestamp': datetime.utcnow().isoformat(),
        'event_type': event_type,
        'user_id': user_id,
        'username': username,
        'ip_address': ip_address,
        'details': details
    }

    if hasattr(current_app, 'security_logger'):
        current_app.security_logger.info(str(audit_message))
    else:
        current_app.logger.warning(f"Security event: {audit_message}")
