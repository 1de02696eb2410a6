from .auth import router as auth_router
from .newsletters import router as newsletters_router
from .subscribers import router as subscribers_router
from .campaigns import router as campaigns_router

__all__ = [
    "auth_router",
    "newsletters_router",
    "subscribers_router",
    "campaigns_router",
]
