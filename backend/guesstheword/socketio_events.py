from flask_socketio import join_room, leave_room, emit
from guesstheword import socketio, registry
from guesstheword.services.games import GameSession, SessionNotFound
from guesstheword.services.games.registry import normalize_code
from typing import Callable


def session_room(session_code: str) -> str:
    return f"session:{normalize_code(session_code)}"


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_session(data):
    session_code = (data or {}).get('session_code')
    if not session_code:
        emit('error', {'message': 'session_code is required'})
        return
    try:
        session = registry.get(session_code)
    except SessionNotFound:
        emit('error', {'message': 'Session not found'})
        return
    room = session_room(session_code)
    join_room(room)
    emit('joined', {'room': room, 'session': session.to_dict()})


def handle_leave_session(data):
    session_code = (data or {}).get('session_code')
    if not session_code:
        emit('error', {'message': 'session_code is required'})
        return
    room = session_room(session_code)
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def broadcast_session(session: GameSession) -> Callable[[], None]:
    """Push every observable change of session to its room.

    Returns the unsubscribe function of the underlying observer.
    """
    room = session_room(session.session_code)

    def _on_change(field, value):
        # Use socketio.emit since this may run in the countdown worker
        socketio.emit('state_update', {'field': field, 'value': value, 'session': session.to_dict()},
                      to=room, namespace='/ws')
        if field == 'finished' and value:
            socketio.emit('session_finished', session.to_dict(), to=room, namespace='/ws')

    return session.observe(_on_change)


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_session', handle_join_session, namespace='/ws')
    socketio.on_event('leave_session', handle_leave_session, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        # Test-only mirror on default namespace
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('join_session', handle_join_session, namespace='/')
        socketio.on_event('leave_session', handle_leave_session, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
