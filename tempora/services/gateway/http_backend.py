from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError
from pydantic.alias_generators import to_camel, to_snake

from tempora.config import settings
from tempora.domain.errors import ExternalCallFailure
from tempora.domain.schemas.calendar import CalendarRef, User
from tempora.domain.schemas.event import CreateEventResult, EventSubmission, FieldError

logger = logging.getLogger(__name__)


class HttpEventBackend:
    """JSON-over-HTTP event backend."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.token = token if token is not None else settings.API_TOKEN
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_S
        self._transport = transport

    async def list_users(self) -> list[User]:
        data = await self._get_json("/users")
        return [User.model_validate(_snake_keys(item)) for item in _items(data, "users")]

    async def list_calendars(self) -> list[CalendarRef]:
        data = await self._get_json("/calendars")
        return [CalendarRef.model_validate(item) for item in _items(data, "calendars")]

    async def create_event(self, payload: EventSubmission) -> CreateEventResult:
        body = _camel_keys(payload.to_payload())
        body["participants"] = [_camel_keys(p) for p in body["participants"]]
        try:
            async with self._client() as client:
                response = await client.post("/events", json=body)
        except httpx.RequestError as exc:
            logger.error("Event creation request failed: %s", exc)
            raise ExternalCallFailure(str(exc)) from exc

        if response.status_code >= 500:
            raise ExternalCallFailure(
                f"Event backend error {response.status_code}",
                status_code=response.status_code,
            )
        data = _safe_json(response)
        if response.is_success:
            event_id = data.get("eventId", data.get("id")) if isinstance(data, dict) else None
            if event_id is None:
                raise ExternalCallFailure("Event backend response carried no event id", response.status_code)
            return CreateEventResult(event_id=event_id)

        errors = _parse_errors(data)
        logger.warning("Event creation rejected status=%s errors=%d", response.status_code, len(errors))
        return CreateEventResult(errors=errors)

    def _client(self) -> httpx.AsyncClient:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=self.timeout,
            transport=self._transport,
        )

    async def _get_json(self, path: str) -> Any:
        try:
            async with self._client() as client:
                response = await client.get(path)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ExternalCallFailure(str(exc), status_code=exc.response.status_code) from exc
        except httpx.RequestError as exc:
            raise ExternalCallFailure(str(exc)) from exc
        data = _safe_json(response)
        if data is None:
            raise ExternalCallFailure(f"Non-JSON response from {path}", response.status_code)
        return data


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _items(data: Any, key: str) -> list[dict[str, Any]]:
    if isinstance(data, dict):
        data = data.get(key, [])
    if not isinstance(data, list):
        raise ExternalCallFailure(f"Unexpected {key} payload")
    return data


def _camel_keys(data: dict[str, Any]) -> dict[str, Any]:
    return {to_camel(key): value for key, value in data.items()}


def _snake_keys(data: dict[str, Any]) -> dict[str, Any]:
    return {to_snake(key): value for key, value in data.items()}


def _parse_errors(data: Any) -> list[FieldError]:
    if not isinstance(data, dict):
        return []
    errors = data.get("errors")
    if isinstance(errors, list):
        parsed = []
        for item in errors:
            if isinstance(item, str):
                parsed.append(FieldError(message=item))
                continue
            try:
                parsed.append(FieldError.model_validate(item))
            except ValidationError:
                logger.debug("Skipping malformed error entry: %r", item)
        return parsed
    if isinstance(errors, dict):
        # {"title": ["already taken"], ...}
        parsed = []
        for field, messages in errors.items():
            if isinstance(messages, str):
                messages = [messages]
            parsed.extend(FieldError(field=field, message=str(m)) for m in messages)
        return parsed
    message = data.get("message")
    return [FieldError(message=message)] if isinstance(message, str) and message else []
