"""FastAPI application entry point."""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from src.server.routers import health, tools
from src.server.settings import settings

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title="CMS Tools Bridge",
    description="HTTP bridge exposing Optimizely CMS tools to LLM agents",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(tools.router)

if not settings.TOOLS_AUTH_TOKEN:
    logger.warning("TOOLS_AUTH_TOKEN is not set; tool endpoints are unauthenticated")


@app.get("/")
async def root():
    """Root endpoint.

    Returns:
        Welcome message with API info
    """
    return {
        "message": "CMS Tools Bridge API",
        "version": "1.0.0",
        "docs": "/docs",
        "tools": "/api/v1/tools"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "src.server.main:app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=True
    )
