from typing import List
from enum import Enum
from pydantic import BaseModel, Field

class LessonCategory(str, Enum):
    HYDROLOGY = "hydrology"
    TIDES = "tides"
    SAFETY = "safety"
    ENVIRONMENT = "environment"

class LessonDifficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

class Lesson(BaseModel):
    """Educational lesson"""
    id: str = Field(..., description="Lesson identifier")
    title: str
    emoji: str
    category: LessonCategory
    difficulty: LessonDifficulty
    description: str
    content: List[str] = Field(..., description="Lesson key points")
