"""Route handlers for Web API."""

from lingualearn.web.routes.auth import router as auth_router
from lingualearn.web.routes.health import router as health_router
from lingualearn.web.routes.languages import router as languages_router
from lingualearn.web.routes.lessons import router as lessons_router
from lingualearn.web.routes.session import router as session_router
from lingualearn.web.routes.vocabulary import router as vocabulary_router

__all__ = [
    "auth_router",
    "health_router",
    "languages_router",
    "lessons_router",
    "session_router",
    "vocabulary_router",
]
