import logging
import os

NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "uvicorn.access")


def configure_logging(level: str | None = None, package_level: str | None = None) -> None:
    """Set up root logging; TEMPORA_LOG_LEVEL tunes only this package's loggers."""
    chosen = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, chosen, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    own = (package_level or os.getenv("TEMPORA_LOG_LEVEL") or "").upper()
    if own:
        logging.getLogger("tempora").setLevel(getattr(logging, own, logging.INFO))
    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
