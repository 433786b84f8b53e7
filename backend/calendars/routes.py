"""
Calendar Event API Routes
Proxies list, create, update and delete to the configured Google calendar.
"""

from flask import Blueprint, g, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from auth.middleware import get_calendar_proxy, get_session_store, require_auth, require_config
from models.calendar_event import EventPayload
from utils.exceptions import InvalidRequestError, UpstreamError

# Create blueprint
events_bp = Blueprint('events', __name__)


def _authorized_service():
    """
    Authorize a Calendar resource for this request's session.

    A refreshed token record is written back to the cookie before the
    provider call is made.
    """
    state = g.session_state
    service, refreshed = get_calendar_proxy().authorize(state)
    if refreshed is not state:
        get_session_store().save(refreshed)
        g.session_state = refreshed
    return service


def _read_payload() -> EventPayload:
    """
    Parse a create/update body.

    Raises:
        InvalidRequestError: If the body is not a JSON object of the right types
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    try:
        return EventPayload.model_validate(body)
    except PydanticValidationError as e:
        details = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        raise InvalidRequestError("Invalid event payload", details)


# ============================================================================
# Calendar Event Operations
# ============================================================================

@events_bp.route('/events', methods=['GET'])
@require_config
@require_auth
def list_events():
    """
    List events in an optional UTC window.

    Query params:
        start: ISO instant, lower bound (optional)
        end: ISO instant, upper bound (optional)
    """
    try:
        service = _authorized_service()
        events = get_calendar_proxy().list_events(
            service,
            start=request.args.get('start') or None,
            end=request.args.get('end') or None
        )
        return jsonify([event.model_dump() for event in events])
    except UpstreamError as e:
        return jsonify({'error': str(e) or 'Failed to load events'}), 500


@events_bp.route('/events', methods=['POST'])
@require_config
@require_auth
def create_event():
    """
    Create an event.

    Expects JSON body: {title, description?, attendees?, startUtc, endUtc}
    Returns the created event as normalized by the provider.
    """
    try:
        payload = _read_payload()
        service = _authorized_service()
        created = get_calendar_proxy().create_event(service, payload)
        return jsonify(created.model_dump())
    except InvalidRequestError as e:
        return jsonify(e.to_dict()), e.status_code
    except UpstreamError as e:
        return jsonify({'error': str(e) or 'Failed to create event'}), 500


@events_bp.route('/events/<event_id>', methods=['PATCH'])
@require_config
@require_auth
def update_event(event_id: str):
    """
    Replace an event's fields. The full event must be sent.
    """
    try:
        payload = _read_payload()
        service = _authorized_service()
        updated = get_calendar_proxy().update_event(service, event_id, payload)
        return jsonify(updated.model_dump())
    except InvalidRequestError as e:
        return jsonify(e.to_dict()), e.status_code
    except UpstreamError as e:
        return jsonify({'error': str(e) or 'Failed to update event'}), 500


@events_bp.route('/events/<event_id>', methods=['DELETE'])
@require_config
@require_auth
def delete_event(event_id: str):
    """Delete an event."""
    try:
        service = _authorized_service()
        get_calendar_proxy().delete_event(service, event_id)
        return jsonify({'ok': True})
    except UpstreamError as e:
        return jsonify({'error': str(e) or 'Failed to delete event'}), 500
