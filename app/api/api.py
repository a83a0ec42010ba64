from fastapi import APIRouter
from app.api.endpoints import admin, subscribe

api_router = APIRouter()

api_router.include_router(subscribe.router)
api_router.include_router(admin.router)
