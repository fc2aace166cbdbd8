"""HTTP API layer.

Routers:
- health: liveness probe
- upload: relay a video upload to YouTube
"""

from app.api.errors import register_exception_handlers
from app.api.routes import router

__all__ = ["register_exception_handlers", "router"]
