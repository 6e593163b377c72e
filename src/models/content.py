"""Content item model.

CMS REST API가 반환하는 콘텐츠(페이지/블록) 버전 레코드를 표현합니다.
API는 camelCase 필드를 사용하므로 alias로 매핑합니다.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


def normalize_key(key: str) -> str:
    """Strip dashes from a GUID content key (the API expects the compact form)."""
    return key.replace("-", "")


class ContentItem(BaseModel):
    """A single version of a content item in one locale.

    Attributes:
        key: 콘텐츠 키 (대시 없는 GUID)
        content_type: 콘텐츠 타입 (예: "ArticlePage")
        display_name: 표시 이름
        version: 버전 번호 (문자열)
        locale: 로케일 코드 (예: "en", "sv")
        status: "draft" / "published" 등
        route_segment: URL 경로 조각
        container: 부모 컨테이너 키
        last_modified: 마지막 수정 시각 (ISO8601 문자열)
        properties: 콘텐츠 타입별 커스텀 필드
    """
    key: Optional[str] = None
    content_type: Optional[str] = Field(None, alias="contentType")
    display_name: Optional[str] = Field(None, alias="displayName")
    version: Optional[str] = None
    locale: Optional[str] = None
    status: Optional[str] = None
    route_segment: Optional[str] = Field(None, alias="routeSegment")
    container: Optional[str] = None
    last_modified: Optional[str] = Field(None, alias="lastModified")
    properties: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "example": {
                "key": "3f2c1b0a9e8d4c7b6a5f4e3d2c1b0a99",
                "contentType": "ArticlePage",
                "displayName": "Hello World",
                "version": "2",
                "locale": "en",
                "status": "draft",
                "routeSegment": "hello-world",
                "container": "0f1e2d3c4b5a69788796a5b4c3d2e1f0",
                "lastModified": "2024-01-01T00:00:00Z",
                "properties": {"Heading": "Hello"},
            }
        }
    )

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "ContentItem":
        """Create a ContentItem from a CMS API payload."""
        data = dict(payload)
        # version은 API에 따라 숫자로 오기도 함
        if data.get("version") is not None:
            data["version"] = str(data["version"])
        return cls.model_validate(data)

    def summary(self) -> Dict[str, Any]:
        """Common item fields returned by the tools."""
        return {
            "content_key": self.key,
            "content_type": self.content_type,
            "display_name": self.display_name,
            "version": self.version,
            "locale": self.locale,
            "status": self.status,
            "route_segment": self.route_segment,
            "container": self.container,
            "last_modified": self.last_modified,
        }
