"""Tool for creating a locale variant (translation) of a CMS page.

번역 플로우:
1. source_locale의 원본 페이지 조회
2. target_locale 버전이 이미 있는지 확인 (있으면 실패 반환)
3. 원본 properties에 번역된 properties를 deep merge
4. 같은 키로 새 로케일 버전 생성 (항상 draft)
"""
import logging
from typing import Any, Dict, Optional

from src.adapters import cms_client
from src.models.content import ContentItem, normalize_key
from src.models.properties import merge_properties
from src.mcp.tools._common import (
    cms_failure,
    failure,
    missing_params,
    optional_str,
    parse_json_param,
)

logger = logging.getLogger(__name__)

TOOL = {
    "name": "translate_cms_page",
    "title": "Translate CMS Page",
    "description": (
        "Create a translation of an existing page in Optimizely CMS: a new language "
        "version of the same content in another locale. The translation is created as a draft."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "content_key": {
                "type": "string",
                "description": "The content key (GUID) of the page to translate. Can include or exclude dashes."
            },
            "source_locale": {
                "type": "string",
                "description": "Locale of the source content (e.g. 'en', 'sv')"
            },
            "target_locale": {
                "type": "string",
                "description": "Locale to translate to (e.g. 'fr', 'de'). Must be enabled in the CMS."
            },
            "translated_display_name": {
                "type": "string",
                "description": "Optional translated display name. Defaults to the source display name."
            },
            "translated_properties": {
                "type": "string",
                "description": (
                    "Optional JSON object string with translated property values, merged over "
                    "the source properties. Example: {\"HeroHeadline\": \"Translated Headline\"}"
                )
            }
        },
        "required": ["content_key", "source_locale", "target_locale"]
    }
}


def build_translation(
    source: ContentItem,
    content_key: str,
    target_locale: str,
    translated_display_name: Optional[str] = None,
    translated_properties: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build the create-version payload for a new locale variant of ``source``."""
    if source.properties is not None:
        properties = merge_properties(source.properties, translated_properties)
    else:
        properties = translated_properties

    return {
        "key": normalize_key(content_key),
        "contentType": source.content_type,
        "container": source.container,
        "locale": target_locale,
        "displayName": translated_display_name or source.display_name,
        "status": "draft",
        "properties": properties,
        "routeSegment": source.route_segment or None,
    }


async def run(params: Dict[str, Any]) -> Dict[str, Any]:
    """Execute the tool.

    Args:
        params: Tool parameters
            - content_key, source_locale, target_locale (required)
            - translated_display_name, translated_properties (optional)

    Returns:
        Success envelope with source/translation summaries, or a failure envelope.
        An existing target-locale version is reported as a failure with
        ``existing_version``.
    """
    error = missing_params(params, ["content_key", "source_locale", "target_locale"])
    if error:
        return error

    translated_properties = None
    if params.get("translated_properties") not in (None, ""):
        translated_properties, error = parse_json_param(
            params, "translated_properties", dict, "object"
        )
        if error:
            return error

    content_key = str(params["content_key"])
    source_locale = str(params["source_locale"])
    target_locale = str(params["target_locale"])
    translated_display_name = optional_str(params, "translated_display_name")

    client = cms_client.get_cms_client()
    try:
        source = await client.get_content_by_key(content_key, None, source_locale)
        logger.info("Fetched source page %s in '%s'", source.display_name, source_locale)

        try:
            existing = await client.get_content_by_key(content_key, None, target_locale)
        except cms_client.CmsNotFoundError:
            existing = None

        if existing is not None:
            logger.warning(
                "Translation of %s already exists in '%s' (version %s)",
                content_key,
                target_locale,
                existing.version,
            )
            return failure(
                "Translation already exists",
                (
                    f"A version of this content already exists for locale '{target_locale}'. "
                    "Use update_cms_page to update it instead."
                ),
                existing_version={
                    "key": existing.key,
                    "version": existing.version,
                    "display_name": existing.display_name,
                    "locale": existing.locale,
                    "status": existing.status,
                },
            )

        translation = build_translation(
            source,
            content_key,
            target_locale,
            translated_display_name,
            translated_properties,
        )
        translated = await client.create_content_version(translation)
    except cms_client.CmsApiError as exc:
        logger.error("Error translating page %s to '%s': %s", content_key, target_locale, exc)
        return cms_failure("create translation", exc)

    logger.info("Created translation %s in '%s'", translated.key, translated.locale)
    return {
        "success": True,
        "source_content_key": source.key,
        "source_locale": source.locale,
        "source_display_name": source.display_name,
        "translation_content_key": translated.key,
        "translation_locale": translated.locale,
        "translation_display_name": translated.display_name,
        "translation_version": translated.version,
        "translation_status": translated.status,
        "content_type": translated.content_type,
        "container": translated.container,
        "properties": translated.properties,
        "message": (
            f'Successfully created translation of "{source.display_name}" from '
            f"'{source_locale}' to '{target_locale}'. Translation created as draft "
            f"with version {translated.version}."
        ),
    }
