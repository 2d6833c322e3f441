# app/routers/__init__.py

from .support.complaint_router import router as complaint_router


__all__ = [
"complaint_router",
]
