from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import os
from contextlib import asynccontextmanager
from datetime import datetime
from zoneinfo import ZoneInfo

from core.config import settings
from core.logging_config import setup_logging
from core.cache import init_cache

# Feature routes
from features.river.routes.river_routes import router as river_router
from features.tides.routes.tide_routes import router as tide_router
from features.currents.routes.current_routes import router as current_router
from features.safety.routes.safety_routes import router as safety_router
from features.conditions.routes.conditions_routes import router as conditions_router
from features.lessons.routes.lesson_routes import router as lesson_router

# Services
from features.river.services.river_service import RiverService
from features.tides.services.tide_service import TideService
from features.safety.services.safety_service import SafetyService
from features.conditions.services.conditions_service import ConditionsService
from features.lessons.services.lesson_service import LessonService

setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    try:
        logger.info("🚀 Starting Hudson River Conditions API...")

        await init_cache()

        # Store services in app state
        app.state.river_service = RiverService()
        app.state.tide_service = TideService()
        app.state.safety_service = SafetyService()
        app.state.lesson_service = LessonService()
        app.state.conditions_service = ConditionsService(
            river_service=app.state.river_service,
            tide_service=app.state.tide_service,
            safety_service=app.state.safety_service
        )

        logger.info(
            f"✨ API startup complete - tide station {settings.tide_station_id}, "
            f"USGS stations {', '.join(settings.usgs_stations)}"
        )
        yield

    except Exception as e:
        logger.error(f"❌ Startup error: {str(e)}")
        raise
    finally:
        logger.info("🔄 Shutting down API...")
        if hasattr(app.state, "river_service"):
            await app.state.river_service.close()
        if hasattr(app.state, "tide_service"):
            await app.state.tide_service.close()
        logger.info("👋 API shutdown complete")

app = FastAPI(
    title="Hudson River Conditions API",
    description="Near-real-time Hudson River flow, tides, currents and kayaking safety",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include feature routers
app.include_router(river_router)
app.include_router(tide_router)
app.include_router(current_router)
app.include_router(safety_router)
app.include_router(conditions_router)
app.include_router(lesson_router)

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "time": datetime.now(ZoneInfo(settings.station_timezone)).isoformat()
    }

if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", 5010))

    uvicorn.run(
        "main:app",
        host=host,
        port=port,
        reload=True,
        log_level="info",
        workers=1
    )
