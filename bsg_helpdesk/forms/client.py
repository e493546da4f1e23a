# bsg_helpdesk/forms/client.py
"""Async client for the template catalog and master data endpoints."""
from __future__ import annotations

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from bsg_helpdesk.core.config import get_settings
from bsg_helpdesk.core.errors import ApiError
from bsg_helpdesk.core.logging import get_logger
from bsg_helpdesk.forms.models import CatalogCategory, CatalogTemplate, MasterDataItem, TemplateField

logger = get_logger(__name__)

M = TypeVar("M", bound=BaseModel)


class BsgApiClient:
    """
    Thin wrapper over ``httpx.AsyncClient``.

    Every request carries the bearer token. Every failure surfaces as
    ``ApiError``: transport errors, non-2xx statuses, bodies that are not JSON,
    envelopes without ``data`` and rows that do not fit the model. Both plain
    JSON lists and the ``{"success": ..., "data": [...]}`` envelope are accepted.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        token = token if token is not None else settings.API_TOKEN
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.API_BASE_URL,
            headers=headers,
            timeout=timeout if timeout is not None else settings.API_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> "BsgApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        params = {k: v for k, v in (params or {}).items() if v is not None}
        try:
            response = await self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise ApiError(f"GET {path} failed with status {status}", status) from exc
        except httpx.HTTPError as exc:
            raise ApiError(f"GET {path} failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(f"GET {path} returned a non-JSON body", response.status_code) from exc
        if isinstance(payload, dict):
            if "data" not in payload:
                message = payload.get("message") or "no data in response"
                raise ApiError(f"GET {path} failed: {message}", response.status_code)
            payload = payload["data"]
        return payload

    async def _get_rows(self, path: str, model: type[M], params: dict[str, Any] | None = None) -> list[M]:
        rows = await self._get(path, params)
        if rows is None:
            return []
        if not isinstance(rows, list):
            raise ApiError(f"GET {path} returned {type(rows).__name__}, expected a list")
        try:
            return [model.model_validate(r) for r in rows]
        except ValidationError as exc:
            logger.debug("Rejected rows from %s: %s", path, exc)
            raise ApiError(f"GET {path} returned malformed rows") from exc

    async def get_categories(self) -> list[CatalogCategory]:
        return await self._get_rows("bsg-templates/categories", CatalogCategory)

    async def get_templates(self, category_id: int, search: str | None = None) -> list[CatalogTemplate]:
        return await self._get_rows(
            "bsg-templates/templates",
            CatalogTemplate,
            {"categoryId": category_id, "search": search or None},
        )

    async def get_template_fields(self, template_id: int) -> list[TemplateField]:
        return await self._get_rows(f"bsg-templates/templates/{template_id}/fields", TemplateField)

    async def get_master_data(self, data_type: str) -> list[MasterDataItem]:
        return await self._get_rows(f"bsg-templates/master-data/{data_type}", MasterDataItem)
