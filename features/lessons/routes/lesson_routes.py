from typing import List, Optional
from fastapi import APIRouter, Depends, Request
from fastapi_cache.decorator import cache
from core.cache import LESSONS_EXPIRE
from features.lessons.models.lesson_types import Lesson, LessonCategory
from features.lessons.services.lesson_service import LessonService

router = APIRouter(
    prefix="/lessons",
    tags=["Lessons"]
)

def get_service(request: Request) -> LessonService:
    """Dependency to get the LessonService instance."""
    return request.app.state.lesson_service

@router.get(
    "",
    response_model=List[Lesson],
    summary="Get lessons",
    description="Returns the lesson catalogue, optionally filtered by category"
)
@cache(expire=LESSONS_EXPIRE, namespace="lessons")
async def get_lessons(
    category: Optional[LessonCategory] = None,
    service: LessonService = Depends(get_service)
) -> List[Lesson]:
    """Get all lessons."""
    return service.get_lessons(category)

@router.get(
    "/{lesson_id}",
    response_model=Lesson,
    summary="Get a lesson",
    description="Returns a single lesson by identifier"
)
async def get_lesson(
    lesson_id: str,
    service: LessonService = Depends(get_service)
) -> Lesson:
    """Get one lesson."""
    return service.get_lesson(lesson_id)
