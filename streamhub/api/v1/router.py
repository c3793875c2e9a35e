# streamhub/api/v1/router.py
"""Main API router combining all v1 endpoints"""
from fastapi import APIRouter, Depends

from streamhub.api.deps import get_current_admin
from streamhub.api.v1 import auth, catalog, history, admin

api_router = APIRouter()

# Include all routers
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(history.router, prefix="/history", tags=["Watch History"])
api_router.include_router(
    admin.router,
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(get_current_admin)]
)
api_router.include_router(catalog.router, tags=["Catalog"])
