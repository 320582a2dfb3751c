# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Put RECLAIM_API_KEY in .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # API
    "RECLAIM_API_KEY": "Reclaim API token (required). RECLAIM_TOKEN is accepted as a fallback.",
    "RECLAIM_BASE_URL": "API base URL (default: https://api.app.reclaim.ai/api).",
    "RECLAIM_USER_AGENT": "User-Agent header sent with every request.",
    "RECLAIM_CONNECT_TIMEOUT_SECONDS": "HTTP connect timeout (default: 5).",
    "RECLAIM_READ_TIMEOUT_SECONDS": "HTTP read timeout (default: 30).",
    # App / logging
    "RECLAIM_LOG_LEVEL": "Console logging level (default: WARNING).",
    "RECLAIM_LOG_DIR": "Write a full debug log to <dir>/reclaim.log (default: off).",
}
