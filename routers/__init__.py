"""
API Routers Package
"""

from .imports import router as imports_router
from .predictions import router as predictions_router
from .analysis import router as analysis_router
from .recommendations import router as recommendations_router

__all__ = ['imports_router', 'predictions_router', 'analysis_router', 'recommendations_router']
