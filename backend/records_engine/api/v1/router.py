"""
API Router v1

Combines all route modules.
"""

from fastapi import APIRouter

from records_engine.api.v1.routes import results, records

api_router = APIRouter()

api_router.include_router(results.router, prefix="/results", tags=["Results"])
api_router.include_router(records.router, prefix="/records", tags=["Records"])
