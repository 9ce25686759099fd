import logging
import os
import sys

BASE = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# ---------------- Logging ----------------


def get_logger(name="deckart"):
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    fmt = logging.Formatter(
        '{"ts":"%(asctime)s","level":"%(levelname)s","step":"%(name)s","msg":"%(message)s"}'
    )
    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(fmt)
    logger.addHandler(sh)
    logger.propagate = False
    return logger


def _package_loggers():
    for name, logger in logging.Logger.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and (
            name == "deckart" or name.startswith(("deckart.", "seeded_svg"))
        ):
            yield logger


def set_level(level: int) -> None:
    """Apply a level to every deckart logger created so far."""
    for logger in _package_loggers():
        logger.setLevel(level)


def set_stream(stream) -> None:
    """Point every deckart log handler at another stream (e.g. sys.stderr)."""
    for logger in _package_loggers():
        for handler in logger.handlers:
            if isinstance(handler, logging.StreamHandler):
                handler.setStream(stream)
