from tempora.domain.schemas.event import FieldError


class ComposerError(Exception):
    """Base class for errors raised by the event composition core."""


class FormIncomplete(ComposerError):
    def __init__(self, fields: list[str]) -> None:
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")

    def as_field_errors(self) -> list[FieldError]:
        return [FieldError(field=name, message=f"{name} is required") for name in self.fields]


class IncompleteSchedule(FormIncomplete):
    """A date or time field required by the selected mode is missing."""


class MissingField(FormIncomplete):
    """Title or calendar is missing."""


class OwnerInvariantViolation(ComposerError):
    def __init__(self, user_id: int, action: str) -> None:
        self.user_id = user_id
        self.action = action
        super().__init__(f"Cannot {action} the event owner (user_id={user_id})")


class SubmissionInProgress(ComposerError):
    def __init__(self) -> None:
        super().__init__("An event submission is already in flight")


class ExternalCallFailure(ComposerError):
    """The backend could not be reached or answered unexpectedly."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ValidationFailure(ExternalCallFailure):
    """The backend rejected the submission with field-level errors."""

    def __init__(self, errors: list[FieldError], status_code: int | None = None) -> None:
        self.errors = list(errors)
        summary = "; ".join(err.message for err in self.errors) or "validation failed"
        super().__init__(summary, status_code=status_code)
