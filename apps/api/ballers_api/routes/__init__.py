"""Route modules."""

from .badges import assigned_router as assigned_badges_router
from .badges import router as badges_router
from .enquiries import router as enquiries_router
from .knowledge_base import router as knowledge_base_router
from .notifications import router as notifications_router
from .properties import router as properties_router
from .referrals import router as referrals_router
from .users import router as users_router
from .visitations import router as visitations_router
from .welcome import router as welcome_router

__all__ = [
    "assigned_badges_router",
    "badges_router",
    "enquiries_router",
    "knowledge_base_router",
    "notifications_router",
    "properties_router",
    "referrals_router",
    "users_router",
    "visitations_router",
    "welcome_router",
]
