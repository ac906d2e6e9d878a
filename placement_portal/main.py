"""
College Placement Portal - Main Application

FastAPI backend with:
- MongoDB for users, jobs, resumes and applications
- Rule-based skill extraction from uploaded resumes
- Job role auto-tagging from requirements
- Eligibility filter + skill-fit job ranking
- JWT authentication

Run: uvicorn placement_portal.main:app --reload
"""

import logging

from bson.errors import InvalidId
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import DuplicateKeyError

from placement_portal import __version__
from placement_portal.api.routes import api_router
from placement_portal.db.mongodb import init_mongo_indexes, test_mongo_connection
from placement_portal.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


configure_logging(settings.log_level)

# Create FastAPI app
app = FastAPI(
    title="College Placement Portal",
    description="""
    Placement portal for students and recruiters.

    ## Features
    - **Authentication**: JWT-based auth for students and recruiters
    - **Students**: Profile (CGPA, branch), resume upload with skill analysis
    - **Recruiters**: Job posting with eligibility criteria and custom questions
    - **Jobs**: Eligible listing ranked by skill fit, apply-time eligibility check
    - **Applications**: Apply, review, accept / reject
    - **Statistics**: Placements by academic year and branch
    """,
    version=__version__,
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api")


@app.exception_handler(InvalidId)
async def invalid_id_handler(request: Request, exc: InvalidId):
    return JSONResponse(status_code=400, content={"detail": "Invalid resource ID"})


@app.exception_handler(DuplicateKeyError)
async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
    logger.warning("Duplicate key on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": "Duplicate entry"})


# Startup event
@app.on_event("startup")
async def startup_event():
    """Initialize MongoDB indexes on startup."""
    try:
        init_mongo_indexes()
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/health", tags=["Health"])
async def health_check():
    return {
        "status": "healthy",
        "app": "College Placement Portal",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
