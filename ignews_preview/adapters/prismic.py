"""
Prismic content backend adapter.

Implements ContentBackendPort against the Prismic REST API (v2).

Key behaviors:
- Resolves the master ref, then queries documents/search by UID
- Empty result set -> None (not found)
- Transport errors, HTTP errors and malformed payloads -> ContentBackendError
- No retries
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ignews_preview.components.content_fetch import ContentBackendError

logger = logging.getLogger(__name__)


# --- Response Schemas ---


class PrismicRef(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    ref: str
    is_master_ref: bool = Field(default=False, alias="isMasterRef")


class PrismicApiInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    refs: list[PrismicRef]


class PrismicDocument(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str | None = None
    uid: str | None = None
    type: str
    lang: str | None = None
    first_publication_date: str | None = None
    last_publication_date: str | None = None
    data: dict[str, Any] | None = None


class PrismicSearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    results: list[PrismicDocument] = Field(default_factory=list)
    total_results_size: int | None = None


def _quote(value: str) -> str:
    """Predicate string literal with backslashes and quotes escaped."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


# --- Adapter ---


class PrismicContentBackend:
    """Content backend backed by a Prismic repository."""

    def __init__(
        self,
        api_endpoint: str,
        access_token: str | None = None,
        timeout_seconds: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._api_endpoint = api_endpoint.rstrip("/")
        self._access_token = access_token
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout_seconds))

    def close(self) -> None:
        self._client.close()

    def _params(self, **extra: str) -> dict[str, str]:
        params = dict(extra)
        if self._access_token:
            params["access_token"] = self._access_token
        return params

    def _get_json(self, url: str, params: dict[str, str], uid: str | None = None) -> Any:
        try:
            resp = self._client.get(url, params=params)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPError as exc:
            raise ContentBackendError(f"Content backend request failed: {exc}", slug=uid) from exc
        except ValueError as exc:
            raise ContentBackendError("Content backend returned invalid JSON", slug=uid) from exc

    def master_ref(self) -> str:
        """Current master ref of the repository."""
        payload = self._get_json(self._api_endpoint, self._params())
        try:
            info = PrismicApiInfo.model_validate(payload)
        except ValidationError as exc:
            raise ContentBackendError("Malformed API info from content backend") from exc

        for ref in info.refs:
            if ref.is_master_ref:
                return ref.ref
        raise ContentBackendError("Content backend has no master ref")

    def get_by_uid(self, document_type: str, uid: str) -> dict[str, Any] | None:
        """Get one document by type and UID, or None if it does not exist."""
        query = f"[[at(my.{document_type}.uid,{_quote(uid)})]]"
        params = self._params(ref=self.master_ref(), q=query, lang="*", pageSize="1")

        logger.debug("Prismic query %s", query)
        payload = self._get_json(f"{self._api_endpoint}/documents/search", params, uid=uid)
        try:
            response = PrismicSearchResponse.model_validate(payload)
        except ValidationError as exc:
            raise ContentBackendError("Malformed search response from content backend", slug=uid) from exc

        if not response.results:
            return None
        return response.results[0].model_dump()


def create_prismic_backend(
    api_endpoint: str,
    access_token_env: str = "PRISMIC_ACCESS_TOKEN",
    timeout_seconds: float | None = None,
) -> PrismicContentBackend:
    """Create a Prismic backend, reading the access token from the environment."""
    return PrismicContentBackend(
        api_endpoint=api_endpoint,
        access_token=os.environ.get(access_token_env) or None,
        timeout_seconds=timeout_seconds,
    )
