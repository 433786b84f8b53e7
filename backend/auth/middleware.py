"""
Request guards for protected routes.

Configuration is checked before the session so a misconfigured server
reports what is missing regardless of who is asking.
"""

from functools import wraps

from flask import current_app, g, jsonify

from utils.exceptions import AuthenticationError, ConfigurationError


def get_settings():
    return current_app.config['SETTINGS']


def get_session_store():
    return current_app.extensions['session_store']


def get_calendar_proxy():
    return current_app.extensions['calendar_proxy']


def require_config(f):
    """Reject the request with 500 when required configuration is missing."""
    @wraps(f)
    def decorated(*args, **kwargs):
        missing = get_settings().missing_keys()
        if missing:
            error = ConfigurationError(missing)
            return jsonify(error.to_dict()), error.status_code
        return f(*args, **kwargs)
    return decorated


def require_auth(f):
    """
    Reject the request with 401 when the cookie carries no session.

    On success the decoded SessionState is available as g.session_state.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        state = get_session_store().load()
        if state is None:
            error = AuthenticationError()
            return jsonify(error.to_dict()), error.status_code
        g.session_state = state
        return f(*args, **kwargs)
    return decorated
