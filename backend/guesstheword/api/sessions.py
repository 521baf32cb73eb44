from flask import Blueprint, jsonify, current_app
from guesstheword import registry, socketio
from guesstheword.services.games import SessionNotFound, RegistryFull
from guesstheword.services.games.registry import normalize_code
from guesstheword.services.games.session import COUNTDOWN_TIME, ONE_SECOND
from guesstheword.services.games.words import WORDS
from guesstheword.socketio_events import broadcast_session, session_room


sessions = Blueprint('sessions', __name__)


@sessions.errorhandler(SessionNotFound)
def _session_not_found(exc):
    return jsonify({'error': 'Session not found'}), 404


@sessions.errorhandler(RegistryFull)
def _registry_full(exc):
    current_app.logger.warning(f"[session-reject] active={len(registry)} reason={exc}")
    return jsonify({'error': 'Too many active sessions'}), 503


def _session_kwargs():
    cfg = current_app.config
    kwargs = {'heartbeat_sec': int(cfg.get('TIMER_HEARTBEAT_SEC', 0))}
    # Without a background worker the countdown only moves when driven manually
    if cfg.get('SESSION_TIMER_BACKGROUND'):
        kwargs['spawn'] = socketio.start_background_task
        kwargs['sleep'] = socketio.sleep
    return kwargs


def _expire_when_finished(session):
    """Dispose session once it has been finished for FINISHED_SESSION_HOLD_SEC."""
    cfg = current_app.config
    # Without a background runner finished sessions are evicted only when the registry is full
    if not cfg.get('SESSION_TIMER_BACKGROUND'):
        return
    hold = int(cfg.get('FINISHED_SESSION_HOLD_SEC', 300))

    def _on_finished(value):
        if value:
            registry.schedule_dispose(session, hold, socketio.start_background_task, socketio.sleep,
                                      on_disposed=_emit_ended)

    session.finished.observe(_on_finished)


def _emit_ended(code):
    socketio.emit('session_ended', {'session_code': code}, to=session_room(code), namespace='/ws')


@sessions.route('/create', methods=['POST'])
def create_session():
    session = registry.create(**_session_kwargs())
    broadcast_session(session)
    _expire_when_finished(session)
    current_app.logger.info(f"[session-open] session={session.session_code} active={len(registry)}")
    payload = session.to_dict()
    payload['message'] = 'New session created!'
    return jsonify(payload), 201


@sessions.route('/words', methods=['GET'])
def list_words():
    return jsonify({'words': list(WORDS)})


@sessions.route('/<string:session_code>/state', methods=['GET'])
def get_session_state(session_code):
    session = registry.get(session_code)
    payload = session.to_dict()
    # Include timings so clients can render the countdown themselves
    payload['durations'] = {
        'countdown_ms': COUNTDOWN_TIME,
        'interval_ms': ONE_SECOND,
    }
    return jsonify(payload)


@sessions.route('/<string:session_code>/correct', methods=['POST'])
def correct(session_code):
    session = registry.get(session_code)
    session.correct()
    return jsonify(session.to_dict())


@sessions.route('/<string:session_code>/skip', methods=['POST'])
def skip(session_code):
    session = registry.get(session_code)
    session.skip()
    return jsonify(session.to_dict())


@sessions.route('/<string:session_code>/acknowledge-finish', methods=['POST'])
def acknowledge_finish(session_code):
    session = registry.get(session_code)
    session.acknowledge_finish()
    return jsonify(session.to_dict())


@sessions.route('/<string:session_code>', methods=['DELETE'])
def dispose_session(session_code):
    code = normalize_code(session_code)
    registry.dispose(code)
    _emit_ended(code)
    current_app.logger.info(f"[session-close] session={code} active={len(registry)}")
    return jsonify({'message': f'Session {code} disposed'})
