# routers/__init__.py

from .auth import router as auth_router
from .events import router as events_router
from .calendar import router as calendar_router
from .members import router as members_router
from .settings import router as settings_router
from .admin import router as admin_router
from .health import router as health_router
