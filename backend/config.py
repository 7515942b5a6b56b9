import os


def _as_bool(value):
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Browser origins allowed to open the Socket.IO connection
    CORS_ORIGINS = [
        o.strip() for o in os.environ.get(
            'CORS_ORIGINS',
            'http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173',
        ).split(',') if o.strip()
    ]
    # Deck and dealing
    HAND_SIZE = int(os.environ.get('HAND_SIZE', '5'))
    DECK_SIZE = int(os.environ.get('DECK_SIZE', '100'))
    TARGET_CARDS_MIN = int(os.environ.get('TARGET_CARDS_MIN', '3'))
    TARGET_CARDS_MAX = int(os.environ.get('TARGET_CARDS_MAX', '5'))
    # Auto-restart after a win (seconds). 0 leaves restart to an explicit new_round.
    ROUND_RESTART_DELAY_SEC = int(os.environ.get('ROUND_RESTART_DELAY_SEC', '0'))
    # Opt-in: turn rotation passes over placeholder seats
    SKIP_PLACEHOLDER_TURNS = _as_bool(os.environ.get('SKIP_PLACEHOLDER_TURNS', 'false'))
    # Optional: seed for deck generation (unset means unseeded)
    RNG_SEED = os.environ.get('RNG_SEED')
