"""
Authentication API Routes
Handles the Google OAuth login redirect, its callback, identity and logout.
"""

from flask import Blueprint, jsonify, redirect, request

from auth.middleware import get_calendar_proxy, get_session_store, get_settings, require_config
from utils.exceptions import UpstreamError

# Create blueprint
auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


@auth_bp.route('/google', methods=['GET'])
@require_config
def google_login():
    """
    Start OAuth 2.0 authorization flow.
    Redirects user to Google's consent screen.
    """
    return redirect(get_calendar_proxy().authorization_url())


@auth_bp.route('/google/callback', methods=['GET'])
@require_config
def google_callback():
    """
    Handle OAuth 2.0 callback from Google.

    Exchanges the authorization code, looks up the user's email, starts a
    new session and sends the browser back to the client application.
    """
    code = request.args.get('code')
    if not code:
        return "Missing code", 400

    try:
        state = get_calendar_proxy().complete_login(code)
    except UpstreamError as e:
        return jsonify({'error': f'OAuth callback failed: {str(e)}'}), 500

    store = get_session_store()
    store.clear()
    store.save(state)
    return redirect(get_settings().frontend_origin)


@auth_bp.route('/me', methods=['GET'])
def me():
    """
    Report whether the browser has a session, and its email.
    Never contacts Google.
    """
    state = get_session_store().load()
    return jsonify(get_calendar_proxy().identity(state))


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Destroy the session unconditionally."""
    get_session_store().clear()
    return jsonify({'ok': True})
