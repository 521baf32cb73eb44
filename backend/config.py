import os


def _origins(raw):
    return [o.strip() for o in raw.split(',') if o.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    CORS_ORIGINS = _origins(os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174',
    ))
    # Run each session's countdown as a Socket.IO background task
    SESSION_TIMER_BACKGROUND = os.environ.get('SESSION_TIMER_BACKGROUND', '1') not in ('0', 'false', 'False')
    # Optional: heartbeat interval for countdown logs (sec). 0 disables.
    TIMER_HEARTBEAT_SEC = int(os.environ.get('TIMER_HEARTBEAT_SEC', '0'))
    # Upper bound on concurrently live sessions
    MAX_SESSIONS = int(os.environ.get('MAX_SESSIONS', '100'))
    # Hold a finished session this long (sec) before it is disposed
    FINISHED_SESSION_HOLD_SEC = int(os.environ.get('FINISHED_SESSION_HOLD_SEC', '300'))
