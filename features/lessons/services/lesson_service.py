from typing import List, Optional
from fastapi import HTTPException

from features.lessons.models.lesson_types import Lesson, LessonCategory, LessonDifficulty

LESSONS: List[Lesson] = [
    Lesson(
        id="discharge",
        title="What is River Discharge?",
        emoji="💧",
        category=LessonCategory.HYDROLOGY,
        difficulty=LessonDifficulty.BEGINNER,
        description="Learn how scientists measure water flow in rivers",
        content=[
            "Discharge is the volume of water flowing past a point per unit of time",
            "Measured in cubic feet per second (ft³/s) or cubic meters per second (m³/s)",
            "Calculated by multiplying the cross-sectional area of the river by the velocity of the water",
            "Higher discharge = more water flowing = stronger currents",
            "Discharge varies with rainfall, snowmelt, and upstream dam releases",
        ]
    ),
    Lesson(
        id="tides",
        title="How Tides Work",
        emoji="🌊",
        category=LessonCategory.TIDES,
        difficulty=LessonDifficulty.BEGINNER,
        description="Understand what causes tides and how they affect rivers",
        content=[
            "Tides are caused by the gravitational pull of the Moon and Sun on Earth's oceans",
            "The Hudson River experiences semi-diurnal tides: two high tides and two low tides per day",
            "Tidal influence extends 153 miles north from New York Harbor to Troy, NY",
            "During flood tide, water moves upstream (north); during ebb tide, it flows downstream (south)",
            "Slack tide is the brief period between flood and ebb when currents are weakest - best time for kayaking!",
        ]
    ),
    Lesson(
        id="currents",
        title="Understanding River Currents",
        emoji="🌀",
        category=LessonCategory.HYDROLOGY,
        difficulty=LessonDifficulty.INTERMEDIATE,
        description="Learn what creates currents and how to read them",
        content=[
            "Currents are the movement of water in a specific direction",
            "In the Hudson, currents are influenced by both tides AND river discharge",
            "Current speed measured in knots (1 knot = 1.15 mph)",
            "Faster currents near the center of the channel, slower near shores",
            "Currents can reverse direction with the tide in tidal rivers like the Hudson",
            "Avoid kayaking when currents exceed 2 knots unless you're experienced",
        ]
    ),
    Lesson(
        id="safety",
        title="Kayaking Safety Basics",
        emoji="🛶",
        category=LessonCategory.SAFETY,
        difficulty=LessonDifficulty.BEGINNER,
        description="Essential safety tips for kayaking on the Hudson",
        content=[
            "ALWAYS wear a properly fitted life jacket (PFD)",
            "Check weather and water conditions before launching",
            "Paddle during slack tide when possible (between high and low tide)",
            "Stay within 100 feet of shore if you're a beginner",
            "Avoid high discharge days (>20,000 ft³/s)",
            "Tell someone your float plan and expected return time",
            "Bring a whistle, phone in waterproof case, and first aid kit",
        ]
    ),
    Lesson(
        id="gage",
        title="What is Gage Height?",
        emoji="📏",
        category=LessonCategory.HYDROLOGY,
        difficulty=LessonDifficulty.INTERMEDIATE,
        description="Learn how water levels are measured",
        content=[
            "Gage height is the water surface elevation above a fixed reference point (datum)",
            "Measured in feet or meters",
            "Changes in gage height indicate rising or falling water levels",
            "Not the same as water depth - it's measured from an arbitrary zero point",
            "Used to predict flooding and monitor river conditions",
            "USGS maintains thousands of stream gages across the United States",
        ]
    ),
    Lesson(
        id="estuary",
        title="The Hudson River Estuary",
        emoji="🌅",
        category=LessonCategory.ENVIRONMENT,
        difficulty=LessonDifficulty.INTERMEDIATE,
        description="Discover what makes the Hudson unique",
        content=[
            "An estuary is where freshwater from rivers meets saltwater from the ocean",
            "The Hudson River Estuary extends from New York Harbor to the Federal Dam at Troy",
            "Brackish water (mix of fresh and salt) creates a unique ecosystem",
            "Tides cause the river to flow BOTH ways - up to 4 times per day!",
            "Home to over 200 species of fish",
            "One of the most important estuaries in North America",
        ]
    ),
]

class LessonService:
    """Read-only access to the static lesson catalogue."""

    def __init__(self, lessons: Optional[List[Lesson]] = None):
        self.lessons = lessons if lessons is not None else LESSONS

    def get_lessons(self, category: Optional[LessonCategory] = None) -> List[Lesson]:
        if category is None:
            return list(self.lessons)
        return [lesson for lesson in self.lessons if lesson.category == category]

    def get_lesson(self, lesson_id: str) -> Lesson:
        lesson = next((l for l in self.lessons if l.id == lesson_id), None)
        if not lesson:
            raise HTTPException(status_code=404, detail=f"Lesson {lesson_id} not found")
        return lesson
