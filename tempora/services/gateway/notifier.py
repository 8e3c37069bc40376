import logging

from tempora.domain.schemas.event import FieldError

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Notifier that reports to the log and keeps what it showed."""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self.log = log or logger
        self.messages: list[tuple[str, str]] = []

    def notify_success(self, message: str) -> None:
        self.messages.append(("success", message))
        self.log.info("%s", message)

    def notify_errors(self, errors: list[FieldError] | str) -> None:
        if isinstance(errors, str):
            self.messages.append(("error", errors))
            self.log.error("%s", errors)
            return
        for error in errors:
            text = f"{error.field}: {error.message}" if error.field else error.message
            self.messages.append(("error", text))
            self.log.error("%s", text)
