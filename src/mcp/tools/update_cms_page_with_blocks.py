"""Tool for appending inline blocks to a content area of a CMS page."""
import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from src.adapters import cms_client
from src.mcp.tools._common import (
    cms_failure,
    failure,
    missing_params,
    optional_str,
    parse_json_param,
)

logger = logging.getLogger(__name__)

TOOL = {
    "name": "update_cms_page_with_blocks",
    "title": "Add Blocks To CMS Page",
    "description": (
        "Add blocks to a ContentArea on an existing page in Optimizely CMS. Creates inline "
        "blocks and appends them to the given ContentArea property, keeping existing blocks."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "page_content_key": {
                "type": "string",
                "description": "The content key (GUID) of the page. Can include or exclude dashes."
            },
            "page_version": {
                "type": "string",
                "description": "Version number of the page to update. Get it from get_cms_page first."
            },
            "content_area_name": {
                "type": "string",
                "description": "Name of the ContentArea property (e.g. 'MainContentArea')"
            },
            "blocks": {
                "type": "string",
                "description": (
                    "JSON array of block definitions with content_type, display_name and properties. "
                    "Example: [{\"content_type\": \"HeroBlock\", \"display_name\": \"My Hero\", "
                    "\"properties\": {\"Heading\": \"Welcome\"}}]"
                )
            },
            "locale": {
                "type": "string",
                "description": "Optional locale code (e.g. 'en', 'sv')"
            }
        },
        "required": ["page_content_key", "page_version", "content_area_name", "blocks"]
    }
}


def generate_inline_block_key() -> str:
    """Random content key for an inline block (32 hex chars, no dashes)."""
    return uuid.uuid4().hex


def _read_block(definition: Any) -> Optional[Tuple[str, str, Dict[str, Any]]]:
    # camelCase 필드도 허용
    if not isinstance(definition, dict):
        return None
    content_type = definition.get("content_type") or definition.get("contentType")
    display_name = definition.get("display_name") or definition.get("displayName")
    properties = definition.get("properties") or {}
    if not content_type or not display_name or not isinstance(properties, dict):
        return None
    return content_type, display_name, properties


def build_inline_block(content_type: str, display_name: str, properties: Dict[str, Any]) -> Dict[str, Any]:
    """Build a content area item holding an inline block."""
    return {
        "key": generate_inline_block_key(),
        "contentType": content_type,
        "name": display_name,
        "content": {"Name": display_name, **properties},
    }


async def run(params: Dict[str, Any]) -> Dict[str, Any]:
    """Execute the tool.

    Args:
        params: Tool parameters
            - page_content_key, page_version, content_area_name, blocks (required)
            - locale (optional)

    Returns:
        Success envelope with block counts, or a failure envelope
    """
    error = missing_params(
        params, ["page_content_key", "page_version", "content_area_name", "blocks"]
    )
    if error:
        return error

    definitions, error = parse_json_param(params, "blocks", list, "array")
    if error:
        return error

    blocks: List[Tuple[str, str, Dict[str, Any]]] = []
    for index, definition in enumerate(definitions):
        block = _read_block(definition)
        if block is None:
            return failure(
                "Invalid block definition",
                f"Block {index + 1} needs content_type, display_name and an object of properties",
            )
        blocks.append(block)

    page_key = str(params["page_content_key"])
    page_version = str(params["page_version"])
    area_name = str(params["content_area_name"])
    locale = optional_str(params, "locale")

    client = cms_client.get_cms_client()
    try:
        page = await client.get_content_by_key(page_key, page_version, locale)

        existing_items = (page.properties or {}).get(area_name)
        if existing_items is None:
            existing_items = []
        if not isinstance(existing_items, list):
            return failure(
                "Invalid content area",
                f"Property '{area_name}' on page \"{page.display_name}\" is not a ContentArea",
            )
        logger.info("Found %d existing block(s) in '%s'", len(existing_items), area_name)

        new_items = [build_inline_block(*block) for block in blocks]
        area_items = [*existing_items, *new_items]

        updated = await client.update_content(
            page_key,
            page_version,
            {"properties": {area_name: area_items}},
            locale,
        )
    except cms_client.CmsApiError as exc:
        logger.error("Error updating page %s with blocks: %s", page_key, exc)
        return cms_failure("update page with blocks", exc)

    return {
        "success": True,
        "page_content_key": updated.key,
        "page_display_name": updated.display_name,
        "page_version": updated.version,
        "content_area_name": area_name,
        "blocks_created": len(new_items),
        "total_blocks": len(area_items),
        "existing_blocks": len(existing_items),
        "blocks": [
            {"content_type": content_type, "display_name": display_name}
            for content_type, display_name, _ in blocks
        ],
        "message": (
            f"Successfully added {len(new_items)} new inline block(s) to ContentArea "
            f"'{area_name}' on page \"{updated.display_name}\". Total blocks: "
            f"{len(area_items)} ({len(existing_items)} existing + {len(new_items)} new)"
        ),
    }
