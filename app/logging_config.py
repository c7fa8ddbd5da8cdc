import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(filename)s::%(funcName)s::%(lineno)d: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attaches a single stdout handler to the root logger (safe to call twice)."""
    root = logging.getLogger()
    root.setLevel(level)
    if not any(getattr(h, "_shiprocket_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._shiprocket_handler = True
        root.addHandler(handler)
    return root
