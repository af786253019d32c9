"""Language and catalog endpoints."""

from fastapi import APIRouter, HTTPException, status

from lingualearn.config.languages import get_language
from lingualearn.web.converters import lesson_summary, session_state
from lingualearn.web.schemas import (
    CatalogResponse,
    LanguageListResponse,
    LanguageResponse,
    LanguageSelectRequest,
    SessionStateResponse,
)
from lingualearn.web.sessions import get_engine

router = APIRouter(prefix="/api/languages", tags=["languages"])


@router.get("", response_model=LanguageListResponse)
async def list_languages() -> LanguageListResponse:
    """List languages offered by the catalog."""
    engine = get_engine()
    languages = []
    for name in engine.languages:
        info = get_language(name)
        languages.append(
            LanguageResponse(
                name=name,
                flag=info.flag if info else "",
                locale=info.locale if info else "",
            )
        )
    return LanguageListResponse(languages=languages, count=len(languages))


@router.post("/select", response_model=SessionStateResponse)
async def select_language(request: LanguageSelectRequest) -> SessionStateResponse:
    """Make a language active and open its dashboard."""
    engine = get_engine()
    if engine.user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Please log in first")
    if not engine.select_language(request.language):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Language {request.language} not available",
        )
    return session_state(engine)


@router.get("/{language}/lessons", response_model=CatalogResponse)
async def list_lessons(language: str) -> CatalogResponse:
    """List the lessons of a language grouped by category."""
    engine = get_engine()
    categories = engine.lessons_for(language)
    if not categories:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Language {language} not available",
        )
    return CatalogResponse(
        language=language,
        categories={
            category: [lesson_summary(lesson) for lesson in lessons]
            for category, lessons in categories.items()
        },
    )
