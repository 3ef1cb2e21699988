"""Logging configuration for zotsync."""

import logging

# Per-request connection chatter from the HTTP stack
NOISY_LOGGERS = ("urllib3", "requests")


def setup_logging(level: int = logging.INFO, verbose: bool = False) -> None:
    """Configure root logger; HTTP library logs stay at WARNING unless verbose."""
    if verbose:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)


__all__ = ["setup_logging"]
