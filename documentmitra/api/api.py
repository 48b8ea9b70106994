from fastapi import APIRouter
from documentmitra.api.endpoints import services, settings, bookings

api_router = APIRouter()
api_router.include_router(services.router, prefix="/services", tags=["services"])
api_router.include_router(settings.router, prefix="/settings", tags=["settings"])
api_router.include_router(bookings.router, prefix="/bookings", tags=["bookings"])

@api_router.get("/health")
def health_check():
    return {"status": "ok"}
