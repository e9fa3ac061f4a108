"""SMMRY article summarization connector."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, PositiveInt, ValidationError

from designernews.settings import Settings, get_settings
from designernews.utils.logging import get_logger

from .base import FormatError, PermanentError, TransientError, raise_for_status

logger = get_logger(__name__)

BREAK_MARKER = "[BREAK]"


class SmmryApiError(PermanentError):
    """SMMRY answered with an API-level error message."""

    def __init__(self, code: Optional[int], message: str):
        super().__init__(f"Smmry Error: {code} - {message}")
        self.code = code
        self.api_message = message


class SmmryRequest(BaseModel):
    url: str
    with_break: bool = True
    keyword_count: PositiveInt = 5
    sentence_count: PositiveInt = 5

    def to_params(self, api_key: str) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "SM_API_KEY": api_key,
            "SM_LENGTH": self.sentence_count,
            "SM_KEYWORD_COUNT": self.keyword_count,
            "SM_URL": self.url,
        }
        if self.with_break:
            # SMMRY treats the bare flag as enabled
            params["SM_WITH_BREAK"] = ""
        return params


class SmmryResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: Optional[str] = Field(None, alias="sm_api_title")
    content: Optional[str] = Field(None, alias="sm_api_content")
    keywords: Optional[List[str]] = Field(None, alias="sm_api_keyword_array")
    error_code: Optional[int] = Field(None, alias="sm_api_error")
    api_message: Optional[str] = Field(None, alias="sm_api_message")

    @property
    def summary_text(self) -> str:
        return (self.content or "").replace(BREAK_MARKER, "\n\n")

    @property
    def display_keywords(self) -> List[str]:
        return [k.upper() for k in self.keywords or []]


class SmmryClient:
    def __init__(self, client: Optional[httpx.AsyncClient] = None, *, settings: Optional[Settings] = None):
        self._settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=float(self._settings.smmry_timeout_seconds))

    async def __aenter__(self) -> "SmmryClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def summarize_url(self, request: SmmryRequest) -> SmmryResponse:
        if not self._settings.smmry_api_key:
            raise PermanentError("SMMRY_API_KEY is not configured.")

        params = request.to_params(self._settings.smmry_api_key.get_secret_value())
        try:
            resp = await self._client.get(self._settings.smmry_endpoint, params=params)
        except httpx.TimeoutException as exc:
            raise TransientError("SMMRY request timed out") from exc
        except httpx.HTTPError as exc:
            raise TransientError("SMMRY request failed") from exc

        raise_for_status(resp.status_code, "SMMRY")
        try:
            result = SmmryResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as exc:
            raise FormatError("SMMRY returned an invalid payload") from exc

        if result.api_message is not None:
            logger.warning(
                "smmry.api_error",
                extra={"url": request.url, "code": result.error_code, "api_message": result.api_message},
            )
            raise SmmryApiError(result.error_code, result.api_message)
        return result
