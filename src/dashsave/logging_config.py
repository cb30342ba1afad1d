import logging
import os
import sys

LOG_LEVEL_ENV = "DASHSAVE_LOG_LEVEL"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"


def configure_logging(default_level: int = logging.INFO) -> int:
    """Send log records to stderr and return the effective level.

    DASHSAVE_LOG_LEVEL (a level name such as ``DEBUG``) overrides
    ``default_level``. Calling again replaces the handler instead of
    stacking another one.
    """
    level = default_level
    level_name = os.getenv(LOG_LEVEL_ENV)
    if level_name:
        level = getattr(logging, level_name.upper(), default_level)

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    for h in list(root.handlers):
        if getattr(h, "_dashsave", False):
            root.removeHandler(h)
    handler._dashsave = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
    return level
