"""
Process-wide defaults for fault event registration.
"""

from typing import Optional, Tuple
import os, json


#! ---- Default configuration values ---- !#

# Directory for the default logger's plain-text log. None keeps output on stderr only.
LOG_DIR: Optional[str] = None
LOG_FILE = "unhandled.log"

VERBOSE = False
EXIT_ON_EVENT = False

# Signals watched on top of the exception and rejection events.
WATCHED_SIGNALS: Tuple[str, ...] = ("SIGINT", "SIGTERM")

CONFIG_ENV_VAR = "UNHANDLED_CONFIG"
CONFIG_FILE = "unhandled.json"



#! ---- Helper functions to load and override config from JSON file ---- !#

def _get_config_path() -> str:
    """Get the path to the JSON override file."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return override
    return os.path.join(os.getcwd(), CONFIG_FILE)


def _load_json_config():
    """Load configuration overrides from a JSON file."""
    path = _get_config_path()
    if not os.path.exists(path):
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError):
        return
    if not isinstance(data, dict):
        return

    global LOG_DIR, LOG_FILE, VERBOSE, EXIT_ON_EVENT, WATCHED_SIGNALS

    if isinstance(data.get("LOG_DIR"), str):
        LOG_DIR = data.get("LOG_DIR")
    if isinstance(data.get("LOG_FILE"), str):
        LOG_FILE = data.get("LOG_FILE")

    if isinstance(data.get("VERBOSE"), bool):
        VERBOSE = data.get("VERBOSE")
    if isinstance(data.get("EXIT_ON_EVENT"), bool):
        EXIT_ON_EVENT = data.get("EXIT_ON_EVENT")

    ws = data.get("WATCHED_SIGNALS")
    if isinstance(ws, (list, tuple)) and ws and all(isinstance(s, str) for s in ws):
        WATCHED_SIGNALS = tuple(s.upper() for s in ws)

_load_json_config()
