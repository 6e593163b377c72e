"""Application settings loaded from environment variables."""
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """Application configuration settings."""

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # Optimizely SaaS CMS (client credentials)
    OPTIMIZELY_CMS_CLIENT_ID: Optional[str] = None
    OPTIMIZELY_CMS_CLIENT_SECRET: Optional[str] = None
    OPTIMIZELY_CMS_BASE_URL: str = "https://api.cms.optimizely.com/preview3"
    OPTIMIZELY_CMS_TOKEN_URL: str = "https://api.cms.optimizely.com/oauth/token"
    OPTIMIZELY_CMS_TIMEOUT: float = 10.0

    # Preview links (프론트엔드 도메인 + 프리뷰 토큰)
    PREVIEW_DOMAIN: str = ""
    PREVIEW_TOKEN: str = ""

    # Tool endpoints 보호용 Bearer 토큰 (설정하지 않으면 인증 없음)
    TOOLS_AUTH_TOKEN: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
