from fastapi import APIRouter

from app.api.auth import router as auth_router

api_router = APIRouter()

# Auth routes at /auth/*
api_router.include_router(auth_router, prefix="/auth", tags=["auth"])
