"""MCP tools package."""

from . import create_cms_article_page
from . import get_cms_page
from . import translate_cms_page
from . import update_cms_page
from . import update_cms_page_with_blocks

# 툴 레지스트리: MCP 서버와 HTTP 라우터에서 공유
# tool_name → 툴 모듈 (TOOL 메타데이터 + async run(params))
TOOLS_REGISTRY = {
    create_cms_article_page.TOOL["name"]: create_cms_article_page,
    get_cms_page.TOOL["name"]: get_cms_page,
    translate_cms_page.TOOL["name"]: translate_cms_page,
    update_cms_page.TOOL["name"]: update_cms_page,
    update_cms_page_with_blocks.TOOL["name"]: update_cms_page_with_blocks,
}

__all__ = [
    "TOOLS_REGISTRY",
    "create_cms_article_page",
    "get_cms_page",
    "translate_cms_page",
    "update_cms_page",
    "update_cms_page_with_blocks",
]
