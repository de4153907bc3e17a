import os
import sys

SHELL_NAME = "recallsh"


def _env_int(name, default, minimum=1):
    """Read a positive integer override from the environment"""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        print(f"Warning: ignoring {name}={raw!r}, expected an integer", file=sys.stderr)
        return default
    if value < minimum:
        print(f"Warning: ignoring {name}={raw!r}, must be at least {minimum}", file=sys.stderr)
        return default
    return value


# Longest line accepted from the terminal, the rest is discarded
COMMAND_LENGTH = _env_int("RECALLSH_COMMAND_LENGTH", 1024, minimum=2)

# Number of commands kept for recall
HISTORY_DEPTH = _env_int("RECALLSH_HISTORY_DEPTH", 10)

PROMPT_SUFFIX = "> "

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_LEVEL = os.getenv("RECALLSH_LOG_LEVEL", "WARNING").upper()
if LOG_LEVEL not in LOG_LEVELS:
    print(f"Warning: unknown log level {LOG_LEVEL!r}, using WARNING", file=sys.stderr)
    LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(name)s: %(levelname)s: %(message)s"
