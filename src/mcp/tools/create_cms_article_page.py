"""Tool for creating article pages in the CMS."""
import logging
from typing import Dict, Any

from src.adapters import cms_client, preview_url
from src.models.content import normalize_key
from src.mcp.tools._common import cms_failure, missing_params, parse_json_param

logger = logging.getLogger(__name__)

ARTICLE_CONTENT_TYPE = "ArticlePage"
DEFAULT_SEO_SETTINGS = {"GraphType": "article"}

TOOL = {
    "name": "create_cms_article_page",
    "title": "Create CMS Article Page",
    "description": (
        "Create a new ArticlePage in Optimizely CMS as a draft. The content type is "
        "always 'ArticlePage' and SEO settings default to GraphType 'article'."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "container": {
                "type": "string",
                "description": "Container key (GUID) where the page is created. Can include or exclude dashes."
            },
            "display_name": {
                "type": "string",
                "description": "Display name of the new article page"
            },
            "locale": {
                "type": "string",
                "description": "Locale code (e.g. 'en', 'sv', 'fr')"
            },
            "properties": {
                "type": "string",
                "description": (
                    "JSON object string with the page properties. "
                    "Example: {\"HeroHeadline\": \"My Title\", \"HeroSubheadline\": \"Subtitle\"}"
                )
            }
        },
        "required": ["container", "display_name", "locale", "properties"]
    }
}


async def run(params: Dict[str, Any]) -> Dict[str, Any]:
    """Execute the tool.

    Args:
        params: Tool parameters (container, display_name, locale, properties)

    Returns:
        Success envelope with the created page and its preview link, or a failure envelope
    """
    error = missing_params(params, ["container", "display_name", "locale", "properties"])
    if error:
        return error

    properties, error = parse_json_param(params, "properties", dict, "object")
    if error:
        return error

    # SEO 설정이 없으면 article 타입으로 기본값 지정
    if not properties.get("SeoSettings"):
        properties = {**properties, "SeoSettings": dict(DEFAULT_SEO_SETTINGS)}

    content_data = {
        "contentType": ARTICLE_CONTENT_TYPE,
        "container": normalize_key(str(params["container"])),
        "displayName": params["display_name"],
        "locale": params["locale"],
        "status": "draft",
        "properties": properties,
    }

    client = cms_client.get_cms_client()
    try:
        page = await client.create_content(content_data)
    except cms_client.CmsApiError as exc:
        logger.error("Error creating article page %r: %s", params["display_name"], exc)
        return cms_failure("create CMS page", exc)

    preview = None
    if page.route_segment:
        page_url = preview_url.construct_page_url(page.content_type, page.route_segment)
        preview = preview_url.generate_preview_url(page.key, page.version, page_url)

    logger.info("Created %s page %s (%s)", page.content_type, page.key, page.locale)
    return {
        "success": True,
        **page.summary(),
        "preview_url": preview["preview_url"] if preview else None,
        "preview_token": preview["token"] if preview else None,
        "properties": page.properties,
        "message": (
            f'Successfully created {page.content_type} page: "{page.display_name}" '
            f"in locale {page.locale}{' with preview URL' if preview else ''}"
        ),
    }
