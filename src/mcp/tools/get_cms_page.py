"""Tool for fetching a page from the CMS."""
import logging
from typing import Dict, Any

from src.adapters import cms_client
from src.mcp.tools._common import cms_failure, missing_params, optional_str

logger = logging.getLogger(__name__)

TOOL = {
    "name": "get_cms_page",
    "title": "Get CMS Page",
    "description": (
        "Fetch an existing page from Optimizely CMS by content key. Returns the full "
        "page data including all properties, version and metadata."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "content_key": {
                "type": "string",
                "description": "The content key (GUID) of the page. Can include or exclude dashes."
            },
            "version": {
                "type": "string",
                "description": "Optional version number. Latest version when omitted."
            },
            "locale": {
                "type": "string",
                "description": "Optional locale code (e.g. 'en', 'sv')"
            }
        },
        "required": ["content_key"]
    }
}


async def run(params: Dict[str, Any]) -> Dict[str, Any]:
    """Execute the tool.

    Args:
        params: Tool parameters (content_key, version, locale)

    Returns:
        Success envelope with the page fields and properties, or a failure envelope
    """
    error = missing_params(params, ["content_key"])
    if error:
        return error

    content_key = str(params["content_key"])
    version = optional_str(params, "version")
    locale = optional_str(params, "locale")

    client = cms_client.get_cms_client()
    try:
        page = await client.get_content_by_key(content_key, version, locale)
    except cms_client.CmsApiError as exc:
        logger.error("Error fetching page %s: %s", content_key, exc)
        return cms_failure("fetch CMS page", exc)

    logger.info("Fetched page %s (version %s)", page.display_name, page.version)
    return {
        "success": True,
        **page.summary(),
        "properties": page.properties,
        "message": (
            f'Successfully fetched {page.content_type} page: "{page.display_name}" '
            f"(version {page.version})"
        ),
    }
