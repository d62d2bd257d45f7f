import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s: %(message)s"


def setup_logger(name: str = "poster_dashboard", level: str = "INFO") -> logging.Logger:
    """Configure the package logger; every module logs through a child of it.

    Under uvicorn the records go to its console handlers, otherwise to
    stdout. Records still propagate so root-level handlers see them too.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.handlers:
        return logger

    served = logging.getLogger("uvicorn.error").handlers
    if served:
        for h in served:
            logger.addHandler(h)
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
