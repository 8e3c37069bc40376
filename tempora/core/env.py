import os

from dotenv import load_dotenv

ACTING_USER_ENV = "TEMPORA_USER_ID"


def load_env() -> None:
    load_dotenv()


def get_required_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"Missing required environment variable: {name}")
    return value


def get_acting_user_id(explicit: int | None = None) -> int:
    """The user composing events: the explicit id, else TEMPORA_USER_ID."""
    if explicit is not None:
        return explicit
    raw = get_required_env(ACTING_USER_ENV)
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{ACTING_USER_ENV} must be an integer user id, got {raw!r}") from exc


def is_strict_roster_enabled() -> bool:
    value = os.getenv("TEMPORA_STRICT_ROSTER", "true")
    return value.strip().lower() in {"true", "1", "yes"}
