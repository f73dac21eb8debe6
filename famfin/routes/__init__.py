from .auth import router as auth_router
from .budget import router as budget_router
from .cash_flow import router as cash_flow_router
from .goals import router as goals_router
from .tasks import router as tasks_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "budget_router",
    "cash_flow_router",
    "goals_router",
    "tasks_router",
    "users_router",
]
