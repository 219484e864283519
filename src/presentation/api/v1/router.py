from fastapi import APIRouter

from .status import status_router
from .board import board_router
from .health import health_router

router = APIRouter()

router.include_router(health_router, tags=["Health"])
router.include_router(status_router, tags=["Status"])
router.include_router(board_router, tags=["Board"])
