from app.api.http.health import router as health_router
from app.api.http.users import router as users_router

__all__ = [
    "health_router",
    "users_router"
]
