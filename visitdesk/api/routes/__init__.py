from fastapi import APIRouter

from visitdesk.api.routes import admin, appointments, auth, health, registration, security

api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(registration.router, prefix="/registrations", tags=["registration"])
api_router.include_router(appointments.router, prefix="/appointments", tags=["appointments"])
api_router.include_router(security.router, prefix="/security", tags=["security"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
