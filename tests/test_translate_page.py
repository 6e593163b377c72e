"""Tests for the translate_cms_page tool.

번역 플로우 검증:
1. 원본 조회 → 대상 로케일 존재 확인 → 병합 → 버전 생성
2. 이미 번역이 있으면 실패 envelope
3. 잘못된 translated_properties JSON
4. CMS 에러 처리
"""
import copy

import pytest

from src.adapters.cms_client import CmsApiError, CmsNotFoundError
from src.mcp.tools import translate_cms_page


PAGE_KEY_DASHED = "3f2c1b0a-9e8d-4c7b-6a5f-4e3d2c1b0a99"


def _not_found():
    return CmsNotFoundError("No versions found", status_code=404)


def _params(**overrides):
    params = {
        "content_key": PAGE_KEY_DASHED,
        "source_locale": "en",
        "target_locale": "sv",
    }
    params.update(overrides)
    return params


@pytest.mark.asyncio
async def test_translate_merges_translated_properties(mock_cms_client, source_page, page_factory):
    """Given: 원본이 있고 sv 버전이 없으면
    When: 번역된 properties와 함께 호출하면
    Then: 원본 위에 deep merge된 properties로 draft 버전이 생성됨
    """
    source_snapshot = copy.deepcopy(source_page.properties)
    mock_cms_client.get_content_by_key.side_effect = [source_page, _not_found()]
    mock_cms_client.create_content_version.return_value = page_factory(
        locale="sv", version="1", status="draft", displayName="Hej Världen"
    )

    result = await translate_cms_page.run(_params(
        translated_display_name="Hej Världen",
        translated_properties='{"HeroHeadline": "Hej", "SeoSettings": {"MetaTitle": "Hej"}}',
    ))

    assert result["success"] is True
    assert result["translation_locale"] == "sv"
    assert result["translation_status"] == "draft"
    assert result["source_locale"] == "en"
    assert "from 'en' to 'sv'" in result["message"]

    sent = mock_cms_client.create_content_version.await_args.args[0]
    assert sent["key"] == "3f2c1b0a9e8d4c7b6a5f4e3d2c1b0a99"
    assert sent["locale"] == "sv"
    assert sent["status"] == "draft"
    assert sent["displayName"] == "Hej Världen"
    assert sent["contentType"] == "ArticlePage"
    assert sent["routeSegment"] == "hello-world"
    assert sent["properties"] == {
        "HeroHeadline": "Hej",
        "SeoSettings": {"GraphType": "article", "MetaTitle": "Hej"},
        "Tags": ["news", "cms"],
    }
    # 원본 properties는 변경되지 않아야 함
    assert source_page.properties == source_snapshot

    calls = mock_cms_client.get_content_by_key.await_args_list
    assert calls[0].args == (PAGE_KEY_DASHED, None, "en")
    assert calls[1].args == (PAGE_KEY_DASHED, None, "sv")


@pytest.mark.asyncio
async def test_translate_without_overrides_copies_source(mock_cms_client, source_page, page_factory):
    mock_cms_client.get_content_by_key.side_effect = [source_page, _not_found()]
    mock_cms_client.create_content_version.return_value = page_factory(locale="sv")

    await translate_cms_page.run(_params())

    sent = mock_cms_client.create_content_version.await_args.args[0]
    assert sent["displayName"] == "Hello World"
    assert sent["properties"] == source_page.properties
    assert sent["properties"] is not source_page.properties


@pytest.mark.asyncio
async def test_translate_source_without_properties_uses_translation(mock_cms_client, page_factory):
    source = page_factory(properties=None, routeSegment=None)
    mock_cms_client.get_content_by_key.side_effect = [source, _not_found()]
    mock_cms_client.create_content_version.return_value = page_factory(locale="sv")

    await translate_cms_page.run(_params(translated_properties='{"Heading": "Hej"}'))

    sent = mock_cms_client.create_content_version.await_args.args[0]
    assert sent["properties"] == {"Heading": "Hej"}
    assert sent["routeSegment"] is None


@pytest.mark.asyncio
async def test_translate_existing_target_locale_fails(mock_cms_client, source_page, page_factory):
    """Given: sv 버전이 이미 있으면 / Then: 생성하지 않고 기존 버전 정보와 함께 실패."""
    existing = page_factory(locale="sv", version="5", status="draft")
    mock_cms_client.get_content_by_key.side_effect = [source_page, existing]

    result = await translate_cms_page.run(_params())

    assert result["success"] is False
    assert result["error"] == "Translation already exists"
    assert "update_cms_page" in result["message"]
    assert result["existing_version"]["version"] == "5"
    assert result["existing_version"]["locale"] == "sv"
    mock_cms_client.create_content_version.assert_not_awaited()


@pytest.mark.asyncio
async def test_translate_existence_check_error_is_reported(mock_cms_client, source_page):
    """Given: 대상 로케일 확인 중 404 이외의 에러 / Then: 번역을 만들지 않고 실패."""
    mock_cms_client.get_content_by_key.side_effect = [
        source_page,
        CmsApiError("CMS API request failed with status 500", status_code=500),
    ]

    result = await translate_cms_page.run(_params())

    assert result["success"] is False
    assert result["status_code"] == 500
    mock_cms_client.create_content_version.assert_not_awaited()


@pytest.mark.asyncio
async def test_translate_source_not_found(mock_cms_client):
    mock_cms_client.get_content_by_key.side_effect = _not_found()

    result = await translate_cms_page.run(_params())

    assert result["success"] is False
    assert result["status_code"] == 404
    assert result["message"].startswith("Failed to create translation")


@pytest.mark.asyncio
async def test_translate_invalid_translated_properties(mock_cms_client):
    result = await translate_cms_page.run(_params(translated_properties="{broken"))

    assert result["success"] is False
    assert result["error"] == "Invalid JSON format for translated_properties"
    mock_cms_client.get_content_by_key.assert_not_awaited()


@pytest.mark.asyncio
async def test_translate_requires_target_locale(mock_cms_client):
    result = await translate_cms_page.run(_params(target_locale=""))

    assert result["success"] is False
    assert "target_locale" in result["message"]
