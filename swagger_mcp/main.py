# The module provides a FastAPI application that serves as the main entry point for the Swagger MCP server.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.2.0

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI

from swagger_mcp.api.v1.api import api_router
from swagger_mcp.core.config import get_settings
from swagger_mcp.core.exceptions import DiscoveryError
from swagger_mcp.core.tool_registry import tool_registry
from swagger_mcp.utils.logger import console


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Loads the tools of the configured API on startup and closes the HTTP client on shutdown."""
    settings = get_settings()
    console.set_level(settings.LOG_LEVEL)
    if settings.SKIP_SWAGGER_DISCOVERY:
        console.warning("Skipping Swagger discovery due to SKIP_SWAGGER_DISCOVERY setting.")
    else:
        console.rule("Swagger Discovery")
        try:
            catalog = await asyncio.to_thread(tool_registry.discover, settings.SWAGGER_API_URL)
        except DiscoveryError as e:
            console.display_error_panel("Swagger Discovery Failed", str(e))
            raise
        console.display_catalog(catalog)
    yield
    await tool_registry.aclose()


app = FastAPI(
    title="Swagger MCP Server",
    version="1.0.0",
    description="Exposes every operation of a Swagger/OpenAPI described REST API as a callable tool.",
    lifespan=lifespan,
)

@app.get("/", summary="Health Check", tags=["Status"])
def read_root():
    """Root endpoint to check if the service is alive."""
    console.info("Health check endpoint was hit.")
    return {"message": "Swagger MCP Server is alive and running!", "tools": len(tool_registry.catalog)}

# Include the v1 router with a global '/v1' prefix
app.include_router(api_router, prefix="/v1")
