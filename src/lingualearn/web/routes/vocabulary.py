"""Vocabulary endpoints."""

from fastapi import APIRouter, HTTPException, status

from lingualearn.web.converters import vocabulary_entry_response
from lingualearn.web.schemas import (
    VocabularyAddRequest,
    VocabularyEntryResponse,
    VocabularyListResponse,
    VocabularyReviewRequest,
)
from lingualearn.web.sessions import get_engine

router = APIRouter(prefix="/api/vocabulary", tags=["vocabulary"])


def _no_language() -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Select a language first")


@router.get("", response_model=VocabularyListResponse)
async def list_vocabulary() -> VocabularyListResponse:
    """List saved words of the current language."""
    engine = get_engine()
    progress = engine.current_progress
    if progress is None or engine.current_language is None:
        raise _no_language()

    return VocabularyListResponse(
        language=engine.current_language,
        entries=[vocabulary_entry_response(i, e) for i, e in enumerate(progress.vocabulary)],
        due=[i for i, _ in engine.due_vocabulary()],
        count=len(progress.vocabulary),
    )


@router.post("", response_model=VocabularyEntryResponse, status_code=status.HTTP_201_CREATED)
async def add_word(request: VocabularyAddRequest) -> VocabularyEntryResponse:
    """Save a word (duplicates are kept)."""
    engine = get_engine()
    entry = engine.add_vocabulary_word(request.word, request.translation, request.context)
    progress = engine.current_progress
    if entry is None or progress is None:
        raise _no_language()
    return vocabulary_entry_response(len(progress.vocabulary) - 1, entry)


@router.post("/{index}/review", response_model=VocabularyEntryResponse)
async def review_word(index: int, request: VocabularyReviewRequest) -> VocabularyEntryResponse:
    """Record a spaced-repetition review."""
    engine = get_engine()
    if engine.current_progress is None:
        raise _no_language()
    entry = engine.review_vocabulary_word(index, request.remembered)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Vocabulary entry {index} not found",
        )
    return vocabulary_entry_response(index, entry)
