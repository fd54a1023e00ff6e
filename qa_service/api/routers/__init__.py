"""
qa_service/api/routers package marker.
"""

from qa_service.api.routers.qa_analysis import router as qa_analysis_router

__all__ = [
    "qa_analysis_router",
]
