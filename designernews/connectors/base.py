"""Connector abstraction, errors, and helpers."""

from __future__ import annotations

from typing import Iterable, List, Protocol

from designernews.models.domain import Story, User


class ConnectorError(Exception):
    """Base connector error."""


class TransientError(ConnectorError):
    """Retryable error (e.g., rate limit, network hiccup)."""


class PermanentError(ConnectorError):
    """Non-retryable error (e.g., 4xx semantics)."""


class FormatError(PermanentError):
    """Payload or identifier that cannot be decoded."""


class DesignerNewsClient(Protocol):
    async def get_top_stories(self, page: int) -> List[Story]: ...  # noqa: D401
    async def get_users(self, ids: str) -> List[User]: ...  # noqa: D401


def to_comma_joined(values: Iterable[str]) -> str:
    return ",".join(values)


def raise_for_status(status_code: int, label: str) -> None:
    """Map an HTTP status to the connector error hierarchy."""
    if status_code in (429,) or status_code >= 500:
        raise TransientError(f"{label} temporary failure: {status_code}")
    if status_code >= 400:
        raise PermanentError(f"{label} error: {status_code}")
