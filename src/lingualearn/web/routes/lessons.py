"""Lesson flow endpoints."""

from fastapi import APIRouter, HTTPException, status

from lingualearn.web.converters import session_state
from lingualearn.web.schemas import (
    ExerciseAnswerRequest,
    ExerciseAnswerResponse,
    ExerciseCompleteRequest,
    LessonStartRequest,
    SessionStateResponse,
)
from lingualearn.web.sessions import get_engine

router = APIRouter(prefix="/api/lessons", tags=["lessons"])


@router.post("/start", response_model=SessionStateResponse)
async def start_lesson(request: LessonStartRequest) -> SessionStateResponse:
    """Open a lesson of the current language."""
    engine = get_engine()
    if engine.user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Please log in first")
    if engine.start_lesson(request.category, request.lesson_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Lesson '{request.lesson_id}' not found",
        )
    return session_state(engine)


@router.post("/exercises/complete", response_model=SessionStateResponse)
async def complete_exercise(request: ExerciseCompleteRequest) -> SessionStateResponse:
    """Record an exercise result graded by the client."""
    engine = get_engine()
    if not engine.complete_exercise(request.exercise_id, request.is_correct):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Exercise '{request.exercise_id}' is not part of the active lesson",
        )
    return session_state(engine)


@router.post("/exercises/answer", response_model=ExerciseAnswerResponse)
async def answer_exercise(request: ExerciseAnswerRequest) -> ExerciseAnswerResponse:
    """Grade a raw answer and record the result."""
    engine = get_engine()
    is_correct = engine.submit_answer(request.exercise_id, request.answer)
    if is_correct is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Exercise '{request.exercise_id}' is not part of the active lesson",
        )
    return ExerciseAnswerResponse(is_correct=is_correct, session=session_state(engine))
