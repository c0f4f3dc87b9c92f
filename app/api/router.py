from fastapi import APIRouter

from app.api.contact import router as contact_router
from app.api.health import router as health_router

api_router = APIRouter()

# API routes at /api/*
api_router.include_router(health_router, prefix="/api", tags=["health"])
api_router.include_router(contact_router, prefix="/api", tags=["contact"])

# Listed in 404 responses so frontends can discover the surface
AVAILABLE_ENDPOINTS = [
    {"method": "GET", "path": "/", "description": "API Welcome"},
    {"method": "GET", "path": "/api/health", "description": "Health Check"},
    {"method": "POST", "path": "/api/contact/send", "description": "Send Contact Message"},
]
