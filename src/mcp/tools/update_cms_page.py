"""Tool for updating fields of an existing CMS page."""
import logging
from typing import Dict, Any

from src.adapters import cms_client
from src.mcp.tools._common import cms_failure, missing_params, optional_str, parse_json_param

logger = logging.getLogger(__name__)

TOOL = {
    "name": "update_cms_page",
    "title": "Update CMS Page",
    "description": (
        "Update an existing page in Optimizely CMS by content key and version. "
        "Can modify properties, displayName, status or other content fields."
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
                "description": "Version number to update. Get it from get_cms_page first."
            },
            "updates": {
                "type": "string",
                "description": (
                    "JSON object string with the fields to update. Example: "
                    "{\"displayName\": \"New Title\", \"properties\": {\"HeroHeadline\": \"Updated\"}}"
                )
            },
            "locale": {
                "type": "string",
                "description": "Optional locale code (e.g. 'en', 'sv')"
            }
        },
        "required": ["content_key", "version", "updates"]
    }
}


async def run(params: Dict[str, Any]) -> Dict[str, Any]:
    """Execute the tool.

    Args:
        params: Tool parameters (content_key, version, updates, locale)

    Returns:
        Success envelope with the updated page, or a failure envelope
    """
    error = missing_params(params, ["content_key", "version", "updates"])
    if error:
        return error

    updates, error = parse_json_param(params, "updates", dict, "object")
    if error:
        return error

    content_key = str(params["content_key"])
    version = str(params["version"])
    locale = optional_str(params, "locale")

    logger.info("Updating page %s version %s (fields: %s)", content_key, version, sorted(updates))

    client = cms_client.get_cms_client()
    try:
        page = await client.update_content(content_key, version, updates, locale)
    except cms_client.CmsApiError as exc:
        logger.error("Error updating page %s: %s", content_key, exc)
        return cms_failure("update CMS page", exc)

    return {
        "success": True,
        **page.summary(),
        "properties": page.properties,
        "message": (
            f'Successfully updated {page.content_type} page: "{page.display_name}" '
            f"(version {page.version})"
        ),
    }
