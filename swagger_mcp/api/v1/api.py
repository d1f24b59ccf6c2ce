# The module is to define the API router for the application.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.2.0

from fastapi import APIRouter
from swagger_mcp.api.v1.endpoints import tools

api_router = APIRouter()

# Include the tools router with a '/tools' prefix
api_router.include_router(tools.router, prefix="/tools", tags=["Tools"])
