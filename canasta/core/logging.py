import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(settings) -> logging.Handler:
    """Send application, uvicorn and fastapi logs to stdout with one format."""
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    # avoid duplicate handlers on reload
    for existing in root.handlers:
        if existing.get_name() == "canasta":
            existing.setLevel(level)
            return existing

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    handler.setLevel(level)
    handler.set_name("canasta")
    root.addHandler(handler)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "fastapi"):
        lg = logging.getLogger(name)
        lg.setLevel(level)
        lg.propagate = False
        if handler not in lg.handlers:
            lg.addHandler(handler)

    return handler
