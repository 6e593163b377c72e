"""Preview link helpers for draft content."""
from __future__ import annotations

import logging
from typing import Dict, Optional
from urllib.parse import urlencode

from src.server.settings import settings

logger = logging.getLogger(__name__)

PREVIEW_EXPIRES_IN = "3600"  # 1 hour

# 콘텐츠 타입별 URL prefix
_ROUTE_PREFIXES = {
    "BlogPage": "/blog",
    "ArticlePage": "/articles",
}


def construct_page_url(content_type: Optional[str], route_segment: str) -> str:
    """Build the site-relative page URL for a content type and route segment."""
    prefix = _ROUTE_PREFIXES.get(content_type or "", "")
    return f"{prefix}/{route_segment}/"


def generate_preview_url(
    content_key: Optional[str],
    content_version: Optional[str],
    page_url: str,
) -> Optional[Dict[str, str]]:
    """Build a preview link for a content version.

    Args:
        content_key: 콘텐츠 키
        content_version: 콘텐츠 버전
        page_url: construct_page_url()로 만든 상대 경로

    Returns:
        {"preview_url", "token", "expires_in"} 또는 키/버전이 없으면 None
    """
    if not content_key or not content_version:
        logger.warning("Cannot build preview URL without content key and version")
        return None

    query = urlencode({"key": content_key, "version": content_version, "preview": "true"})
    preview_url = f"{settings.PREVIEW_DOMAIN}{page_url}?{query}"
    logger.info("Generated preview URL for %s (version %s)", content_key, content_version)

    return {
        "preview_url": preview_url,
        "token": settings.PREVIEW_TOKEN,
        "expires_in": PREVIEW_EXPIRES_IN,
    }
