"""Tool discovery and execution endpoints.

LLM 오케스트레이션 레이어가 HTTP로 CMS 툴을 호출할 때 사용하는 엔드포인트입니다.

엔드포인트:
- GET /api/v1/tools: 사용 가능한 툴 목록 및 입력 스키마 조회
- POST /api/v1/tools/execute: 지정된 툴 실행
"""
from fastapi import APIRouter, Depends, HTTPException, Header, status
from typing import Optional
from src.server.deps import verify_tools_token
from src.server.schemas import (
    ToolExecuteRequest,
    ToolExecuteResult,
    ToolsListResponse,
    ToolSchema,
)
from src.mcp.tools import TOOLS_REGISTRY
import logging
import uuid

router = APIRouter(
    prefix="/api/v1/tools",
    tags=["tools"],
    dependencies=[Depends(verify_tools_token)],
)
logger = logging.getLogger(__name__)


@router.get("", response_model=ToolsListResponse)
async def list_tools() -> ToolsListResponse:
    """Return the metadata and input schema of every registered tool.

    Example:
        >>> GET /api/v1/tools
        >>> Response:
        {
            "tools": [
                {
                    "name": "get_cms_page",
                    "title": "Get CMS Page",
                    "description": "Fetch an existing page from Optimizely CMS ...",
                    "input_schema": {
                        "type": "object",
                        "properties": {"content_key": {"type": "string"}, ...},
                        "required": ["content_key"]
                    }
                },
                ...
            ]
        }
    """
    tools = []
    for tool_module in TOOLS_REGISTRY.values():
        tool_def = tool_module.TOOL
        tools.append(ToolSchema(
            name=tool_def["name"],
            title=tool_def.get("title", tool_def["name"]),
            description=tool_def.get("description", ""),
            input_schema=tool_def.get("input_schema", {})
        ))

    return ToolsListResponse(tools=tools)


@router.post("/execute", response_model=ToolExecuteResult)
async def execute_tool(
    request: ToolExecuteRequest,
    x_idempotency_key: Optional[str] = Header(None),
) -> ToolExecuteResult:
    """지정된 툴을 실행합니다.

    처리 과정:
    1. 요청 ID 결정 (x-idempotency-key 헤더 또는 UUID)
    2. 툴 존재 여부 확인
    3. await tool.run(params)
    4. 결과 반환 또는 에러 처리

    툴이 반환한 failure envelope(success=False)는 정상 응답(200)으로 전달됩니다.

    Raises:
        HTTPException:
            - 400: 툴이 존재하지 않음
            - 500: 툴 실행 중 예상하지 못한 예외
    """
    request_id = x_idempotency_key or str(uuid.uuid4())
    logger.info(f"Executing tool '{request.name}' (request id: {request_id})")

    if request.name not in TOOLS_REGISTRY:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Tool '{request.name}' not found"
        )

    tool_module = TOOLS_REGISTRY[request.name]

    try:
        result = await tool_module.run(dict(request.params or {}))
    except Exception as e:
        logger.exception(f"Error executing tool '{request.name}'")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": {
                    "type": type(e).__name__,
                    "message": str(e),
                    "code": "EXECUTION_ERROR",
                    "request_id": request_id
                }
            }
        )

    return ToolExecuteResult(ok=True, tool=request.name, result=result)
