from __future__ import annotations

import logging

from starlette.config import Config

config = Config(".env")

APP_HOST = config("APP_HOST", default="127.0.0.1")
APP_PORT = config("APP_PORT", cast=int, default=8000)

LOG_LEVEL = config("LOG_LEVEL", cast=int, default=logging.WARNING)
CODE_HOTRELOAD = config("CODE_HOTRELOAD", cast=bool, default=False)

DB_HOST = config("DB_HOST", default="localhost")
DB_PORT = config("DB_PORT", cast=int, default=5432)
DB_USER = config("DB_USER", default="quavertrack")
DB_PASS = config("DB_PASS", default="")
DB_NAME = config("DB_NAME", default="quavertrack")

# a full dsn takes precedence over the individual parts
DB_DSN = config(
    "DB_DSN",
    default="postgresql://{username}:{password}@{host}:{port}/{db}".format(
        username=DB_USER,
        password=DB_PASS,
        host=DB_HOST,
        port=DB_PORT,
        db=DB_NAME,
    ),
)

QUAVER_API_URL = config("QUAVER_API_URL", default="https://api.quavergame.com")
QUAVER_API_TIMEOUT = config("QUAVER_API_TIMEOUT", cast=float, default=10.0)

UPDATE_COOLDOWN_SECONDS = config("UPDATE_COOLDOWN_SECONDS", cast=int, default=10)

# required for the batch update endpoint; an empty token rejects every call
UPDATE_TOKEN = config("UPDATE_TOKEN", default="")
