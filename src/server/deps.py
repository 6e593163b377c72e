"""Dependency injection for FastAPI routes.

TOOLS_AUTH_TOKEN이 설정되어 있으면 툴 엔드포인트는 Bearer 토큰을 요구합니다.
(LLM 오케스트레이션 레이어가 설정된 토큰을 Authorization 헤더로 전달)
"""
from __future__ import annotations

import hmac
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.server.settings import settings

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False, description="Tool invocation bearer token")


async def verify_tools_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> None:
    """Reject tool calls without the configured bearer token.

    Raises:
        HTTPException: 401 - 토큰이 없거나 일치하지 않음
    """
    expected = settings.TOOLS_AUTH_TOKEN
    if not expected:
        return

    token = credentials.credentials if credentials else ""
    if not hmac.compare_digest(token.encode(), expected.encode()):
        logger.warning("Rejected tool request with missing or invalid bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
