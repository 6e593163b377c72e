"""Async client for the Optimizely SaaS CMS REST API."""
from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, ValidationError

from src.models.content import ContentItem, normalize_key
from src.server.settings import settings

logger = logging.getLogger(__name__)

CONTENT_PATH = "/experimental/content"
MERGE_PATCH_CONTENT_TYPE = "application/merge-patch+json"
_FRACTION_RE = re.compile(r"(\.\d+)")


class CmsApiError(RuntimeError):
    """Raised when the CMS API request fails or returns an unexpected response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class CmsNotFoundError(CmsApiError):
    """Raised when the requested content (version/locale) does not exist."""


class CmsClientConfig(BaseModel):
    """Connection settings for one CMS client instance."""

    client_id: str = ""
    client_secret: str = ""
    base_url: str = ""
    token_url: str = ""
    timeout: float = 10.0

    @classmethod
    def from_settings(cls, app_settings: Any) -> "CmsClientConfig":
        return cls(
            client_id=app_settings.OPTIMIZELY_CMS_CLIENT_ID or "",
            client_secret=app_settings.OPTIMIZELY_CMS_CLIENT_SECRET or "",
            base_url=app_settings.OPTIMIZELY_CMS_BASE_URL or "",
            token_url=app_settings.OPTIMIZELY_CMS_TOKEN_URL or "",
            timeout=app_settings.OPTIMIZELY_CMS_TIMEOUT or 10.0,
        )


class OptimizelyCmsClient:
    """CRUD operations on content items.

    The client exchanges its client credentials for an access token on the
    first request and reuses it for the lifetime of the instance.

    Args:
        config: 접속 정보 (호출하는 쪽에서 주입)
        transport: 테스트용 httpx transport (선택)
    """

    def __init__(
        self,
        config: CmsClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self._access_token: Optional[str] = None

    def _build_url(self, path: str) -> str:
        if not self.config.base_url:
            raise CmsApiError("OPTIMIZELY_CMS_BASE_URL is not configured.")
        base = self.config.base_url.rstrip("/")
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{base}{path}"

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.config.timeout, transport=self._transport)

    async def _get_access_token(self) -> str:
        if self._access_token:
            return self._access_token

        if not (self.config.client_id and self.config.client_secret):
            raise CmsApiError("CMS client credentials are not configured.")
        if not self.config.token_url:
            raise CmsApiError("OPTIMIZELY_CMS_TOKEN_URL is not configured.")

        try:
            async with self._http_client() as client:
                response = await client.post(
                    self.config.token_url,
                    data={
                        "grant_type": "client_credentials",
                        "client_id": self.config.client_id,
                        "client_secret": self.config.client_secret,
                    },
                    headers={"Accept": "application/json"},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "CMS token endpoint responded with status %s", exc.response.status_code
            )
            raise CmsApiError(
                f"CMS authentication failed with status {exc.response.status_code}",
                status_code=exc.response.status_code,
                details=exc.response.text[:500],
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("CMS token request failed: %s", exc)
            raise CmsApiError("CMS authentication request failed") from exc

        try:
            payload = response.json()
        except json.JSONDecodeError as exc:
            raise CmsApiError("Invalid JSON response from CMS token endpoint") from exc

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token:
            raise CmsApiError("CMS token response missing access_token")

        self._access_token = token
        return token

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Any] = None,
        content_type: str = "application/json",
    ) -> Any:
        url = self._build_url(path)
        token = await self._get_access_token()
        headers = {
            "Accept": "application/json",
            "Authorization": f"Bearer {token}",
        }
        query = {k: v for k, v in (params or {}).items() if v is not None}

        request_kwargs: Dict[str, Any] = {"params": query, "headers": headers}
        if json_body is not None:
            headers["Content-Type"] = content_type
            request_kwargs["content"] = json.dumps(json_body)

        try:
            async with self._http_client() as client:
                response = await client.request(method, url, **request_kwargs)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            body_preview = exc.response.text[:500]
            logger.error(
                "CMS API responded with status %s for %s %s: %s",
                status_code,
                method,
                url,
                body_preview,
            )
            error_cls = CmsNotFoundError if status_code == 404 else CmsApiError
            raise error_cls(
                f"CMS API request failed with status {status_code}",
                status_code=status_code,
                details=_decode_error_body(exc.response),
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("CMS API request failed for %s %s: %s", method, url, exc)
            raise CmsApiError(f"CMS API request failed: {exc}") from exc

        if not response.content:
            return {}

        try:
            return response.json()
        except json.JSONDecodeError as exc:
            preview = response.text[:200]
            logger.error("Failed to decode CMS JSON response from %s: %s", url, preview)
            raise CmsApiError("Invalid JSON response from CMS API") from exc

    async def get_content_by_key(
        self,
        key: str,
        version: Optional[str] = None,
        locale: Optional[str] = None,
    ) -> ContentItem:
        """Fetch one version of a content item.

        Without ``version`` the most recently modified version in ``locale``
        is returned.

        Raises:
            CmsNotFoundError: 해당 키/버전/로케일의 콘텐츠가 없을 때
            CmsApiError: 그 외 요청 실패
        """
        content_key = normalize_key(key)

        if version:
            payload = await self._request(
                "GET",
                f"{CONTENT_PATH}/{content_key}/versions/{version}",
                params={"locale": locale},
            )
            return _to_item(payload)

        payload = await self._request(
            "GET",
            f"{CONTENT_PATH}/{content_key}/versions",
            params={"locales": locale},
        )
        items = _extract_items(payload)
        if not items:
            where = f" in locale '{locale}'" if locale else ""
            raise CmsNotFoundError(
                f"No versions found for content {content_key}{where}",
                status_code=404,
            )
        latest = max(items, key=_modified_at)
        return _to_item(latest)

    async def create_content(self, data: Dict[str, Any]) -> ContentItem:
        """Create a new content item (first version)."""
        body = dict(data)
        if body.get("container"):
            body["container"] = normalize_key(body["container"])
        payload = await self._request("POST", CONTENT_PATH, json_body=body)
        return _to_item(payload)

    async def create_content_version(self, data: Dict[str, Any]) -> ContentItem:
        """Create a new version (e.g. a new locale variant) of an existing item."""
        key = data.get("key")
        if not key:
            raise CmsApiError("Content key is required to create a content version")
        body = {k: v for k, v in data.items() if v is not None}
        body["key"] = normalize_key(key)
        payload = await self._request(
            "POST",
            f"{CONTENT_PATH}/{body['key']}/versions",
            json_body=body,
        )
        return _to_item(payload)

    async def update_content(
        self,
        key: str,
        version: str,
        updates: Dict[str, Any],
        locale: Optional[str] = None,
    ) -> ContentItem:
        """Patch an existing content version (JSON merge patch)."""
        payload = await self._request(
            "PATCH",
            f"{CONTENT_PATH}/{normalize_key(key)}/versions/{version}",
            params={"locale": locale},
            json_body=updates,
            content_type=MERGE_PATCH_CONTENT_TYPE,
        )
        return _to_item(payload)


def _to_item(payload: Any) -> ContentItem:
    if not isinstance(payload, dict):
        logger.error("Unexpected content payload from CMS API: %r", payload)
        raise CmsApiError("Unexpected content payload from CMS API", details=payload)
    try:
        return ContentItem.from_api(payload)
    except (TypeError, ValueError, ValidationError) as exc:
        logger.error("Unexpected content payload from CMS API: %s", exc)
        raise CmsApiError("Unexpected content payload from CMS API", details=payload) from exc


def _modified_at(item: Dict[str, Any]) -> datetime:
    """Parse an item's lastModified. Missing or unparseable values sort first."""
    raw = item.get("lastModified")
    if not isinstance(raw, str) or not raw:
        return datetime.min.replace(tzinfo=timezone.utc)
    try:
        # 소수 초는 마이크로초 6자리로 맞춤 (.NET은 7자리를 보냄)
        normalized = _FRACTION_RE.sub(
            lambda m: m.group(1)[:7].ljust(7, "0"), raw.replace("Z", "+00:00")
        )
        value = datetime.fromisoformat(normalized)
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    # offset 없는 값은 UTC로 간주
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _extract_items(payload: Any) -> List[Dict[str, Any]]:
    if isinstance(payload, list):
        return [item for item in payload if isinstance(item, dict)]
    if isinstance(payload, dict):
        items = payload.get("items")
        if isinstance(items, list):
            return [item for item in items if isinstance(item, dict)]
    return []


def _decode_error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except json.JSONDecodeError:
        return response.text[:500]


def get_cms_client() -> OptimizelyCmsClient:
    """Build a CMS client from the application settings."""
    return OptimizelyCmsClient(CmsClientConfig.from_settings(settings))
