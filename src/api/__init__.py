from fastapi import APIRouter

from api.health import router as health_router
from api.scan import router as scan_router
from api.search import router as search_router
from api.suggestions import router as suggestions_router

router = APIRouter()
router.include_router(health_router)
router.include_router(scan_router)
router.include_router(search_router)
router.include_router(suggestions_router)
