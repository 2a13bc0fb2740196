from fastapi import APIRouter

from api.v1.routes.messages import router as messages_router
from api.v1.routes.realtime import router as realtime_router
from api.v1.routes.status import router as status_router

router = APIRouter()
router.include_router(messages_router)
router.include_router(realtime_router)
router.include_router(status_router)
