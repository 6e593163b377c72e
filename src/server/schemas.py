"""Pydantic schemas for request/response models.

FastAPI 엔드포인트의 요청/응답 모델을 정의합니다.
"""
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Tool 실행 관련 스키마
# ============================================================================

class ToolExecuteRequest(BaseModel):
    """툴 실행 요청 모델.

    Attributes:
        name: 실행할 툴 이름 (예: "get_cms_page")
        params: 툴별 파라미터. JSON 값(properties, updates, blocks 등)은
            문자열로 인코딩해서 전달합니다.
    """
    name: str = Field(..., description="Tool name")
    params: Optional[Dict[str, Any]] = Field(default_factory=dict, description="Tool parameters")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "get_cms_page",
                "params": {
                    "content_key": "3f2c1b0a-9e8d-4c7b-6a5f-4e3d2c1b0a99",
                    "locale": "en"
                }
            }
        }
    )


class ToolExecuteResult(BaseModel):
    """툴 실행 결과 응답 모델.

    ``result``는 툴이 반환한 envelope 그대로입니다. CMS 호출 실패나 잘못된
    입력은 ``result.success == False``로 표현되며 ``ok``는 True입니다.

    Attributes:
        ok: 툴 실행이 예외 없이 끝났는지 여부
        tool: 실행된 툴 이름
        result: 툴 결과 envelope
    """
    ok: bool
    tool: str
    result: Any


class ToolSchema(BaseModel):
    """툴 메타데이터 (이름, 설명, JSON Schema 입력 스키마)."""
    name: str
    title: str
    description: str
    input_schema: Dict[str, Any]


class ToolsListResponse(BaseModel):
    """GET /api/v1/tools 응답 모델."""
    tools: List[ToolSchema]
