from fastapi import APIRouter
from navlearn.api.routes.auth import auth_router
from navlearn.api.routes.knowledge import knowledge_router
from navlearn.api.routes.modules import modules_router
from navlearn.api.routes.progress import progress_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(progress_router)
api_router.include_router(modules_router)
api_router.include_router(knowledge_router)
