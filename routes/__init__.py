# Routes package __init__.py - re-exports routers for main.py convenience
from .entries import router as entries_router
from .today import router as today_router
from .stats import router as stats_router
from .maintenance import router as maintenance_router

__all__ = ['entries_router', 'today_router', 'stats_router', 'maintenance_router']
