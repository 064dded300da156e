from fastapi import APIRouter

from lexicon_dbi.app.api.v1.endpoints import i18n

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(i18n.router, prefix="/i18n", tags=["i18n"])
