from quirknotes.web.routers.auth import router as auth_router
from quirknotes.web.routers.notes import router as notes_router

__all__ = [
    "auth_router",
    "notes_router",
]
