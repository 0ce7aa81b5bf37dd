"""
config.py — Application Defaults
================================
Defaults for the Flask adapter.  Override them with a mapping passed to
create_app() or with PATHSTEP_* environment variables, e.g.

    PATHSTEP_COMPLETE_DELAY_MS=0 PATHSTEP_LOG_LEVEL=DEBUG python main.py

COMPLETE_DELAY_MS is only a hint returned to the client: how long a UI
may wait before showing a "complete" result.  The engines never sleep.
"""

import secrets

DEFAULT_CONFIG = {
    "SECRET_KEY":        secrets.token_hex(32),
    "COMPLETE_DELAY_MS": 100,
    "LOG_LEVEL":         "INFO",
    "DIRECTED":          True,
}

ENV_PREFIX = "PATHSTEP"
