"""
API routes for the projection and summary engine.
"""

from fastapi import APIRouter

from propscope.api import calculations, properties, settings, summaries

router = APIRouter()

# Include sub-routers
router.include_router(calculations.router, prefix="/calculate", tags=["calculations"])
router.include_router(summaries.router, prefix="/summaries", tags=["summaries"])
router.include_router(properties.router, prefix="/properties", tags=["properties"])
router.include_router(settings.router, prefix="/settings", tags=["settings"])
