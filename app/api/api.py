from fastapi import APIRouter
from app.api.endpoints import donors

api_router = APIRouter()

api_router.include_router(donors.router, prefix="/donor", tags=["donor"])
