import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Listening port for run.py
    PORT = int(os.environ.get('PORT', '3000'))
    # Comma separated; '*' allows any origin
    CORS_ALLOWED_ORIGINS = os.environ.get('CORS_ALLOWED_ORIGINS', '*')
    # Room limits
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '8'))
    IMPOSTOR_COUNT = int(os.environ.get('IMPOSTOR_COUNT', '2'))
    STARTING_BUDGET = int(os.environ.get('STARTING_BUDGET', '100'))
    # Evict rooms idle longer than this (seconds). 0 disables.
    ROOM_IDLE_TTL_SEC = int(os.environ.get('ROOM_IDLE_TTL_SEC', '0'))
