# routers/__init__.py
from .auth import router as auth_router
from .trackers import router as trackers_router
from .flats import router as flats_router
from .participants import router as participants_router
from .users import router as users_router
from .geocode import router as geocode_router

__all__ = [
     "auth_router",
     "trackers_router",
     "flats_router",
     "participants_router",
     "users_router",
     "geocode_router",
]
