"""Pytest configuration and fixtures.

모든 테스트에서 공유되는 fixture들을 정의합니다.

주요 Fixture:
- client: FastAPI 테스트 클라이언트
- source_page / page_factory: 테스트용 ContentItem
- mock_cms_client: CMS REST 클라이언트 mock (get_cms_client 패치)
- cms_config: MockTransport 기반 클라이언트 테스트용 설정

각 fixture는 실제 CMS를 호출하지 않고 더미 데이터를 반환합니다.
"""
import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, patch

from src.adapters.cms_client import CmsClientConfig
from src.models.content import ContentItem
from src.server.main import app


PAGE_KEY = "3f2c1b0a9e8d4c7b6a5f4e3d2c1b0a99"
PAGE_KEY_DASHED = "3f2c1b0a-9e8d-4c7b-6a5f-4e3d2c1b0a99"
CONTAINER_KEY = "0f1e2d3c4b5a69788796a5b4c3d2e1f0"


@pytest.fixture
def client():
    """FastAPI TestClient (실제 HTTP 서버 없이 엔드포인트 호출)."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def _reset_tool_settings():
    """Keep auth/preview settings predictable across tests."""
    from src.server.settings import settings

    saved = (settings.TOOLS_AUTH_TOKEN, settings.PREVIEW_DOMAIN, settings.PREVIEW_TOKEN)
    settings.TOOLS_AUTH_TOKEN = None
    settings.PREVIEW_DOMAIN = "https://www.example.com"
    settings.PREVIEW_TOKEN = "preview-token"
    yield settings
    settings.TOOLS_AUTH_TOKEN, settings.PREVIEW_DOMAIN, settings.PREVIEW_TOKEN = saved


@pytest.fixture
def page_factory():
    """Build ContentItem objects with sensible defaults."""
    def _make(**overrides):
        data = {
            "key": PAGE_KEY,
            "contentType": "ArticlePage",
            "displayName": "Hello World",
            "version": "3",
            "locale": "en",
            "status": "published",
            "routeSegment": "hello-world",
            "container": CONTAINER_KEY,
            "lastModified": "2024-01-01T00:00:00Z",
            "properties": {
                "HeroHeadline": "Hello",
                "SeoSettings": {"GraphType": "article", "MetaTitle": "Hello"},
                "Tags": ["news", "cms"],
            },
        }
        data.update(overrides)
        return ContentItem.from_api(data)
    return _make


@pytest.fixture
def source_page(page_factory):
    return page_factory()


@pytest.fixture
def mock_cms_client():
    """CMS 클라이언트를 mocking합니다.

    Yields:
        AsyncMock: get_content_by_key / create_content / create_content_version /
        update_content 메서드를 가진 mock

    설명:
        - src.adapters.cms_client.get_cms_client를 패치하므로
          모든 툴이 이 mock을 사용
        - 각 테스트에서 return_value / side_effect를 설정
    """
    mock_client = AsyncMock()
    mock_client.get_content_by_key = AsyncMock()
    mock_client.create_content = AsyncMock()
    mock_client.create_content_version = AsyncMock()
    mock_client.update_content = AsyncMock()

    with patch("src.adapters.cms_client.get_cms_client", return_value=mock_client):
        yield mock_client


@pytest.fixture
def cms_config():
    return CmsClientConfig(
        client_id="client-id",
        client_secret="client-secret",
        base_url="https://cms.example.com/preview3",
        token_url="https://cms.example.com/oauth/token",
        timeout=5.0,
    )
