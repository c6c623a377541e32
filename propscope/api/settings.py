"""
Assumption defaults API endpoint.
"""

from fastapi import APIRouter

from propscope.api.schemas import settings_to_response
from propscope.config import default_global_settings, get_settings

router = APIRouter()


@router.get("/defaults")
async def get_default_settings():
    """Configured default assumptions and loan percentages."""
    app_settings = get_settings()
    return {
        "settings": settings_to_response(default_global_settings()),
        "loan_percentage_1": app_settings.default_loan_percentage_1,
        "loan_percentage_2": app_settings.default_loan_percentage_2,
    }
