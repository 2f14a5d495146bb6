"""
SensAI Career Assistant - Main Application

FastAPI backend with:
- PostgreSQL for structured data (users, industry insights, assessments)
- MongoDB for documents (resumes, AI coaching reports)
- Gemini AI for insights, quizzes, feedback and skill-gap analysis
- Bearer tokens from the auth provider

Run: uvicorn sensai.main:app --reload
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sensai import __version__
from sensai.api.routes import api_router
from sensai.core.config import get_settings
from sensai.db.mongodb import init_mongo_indexes, test_mongo_connection
from sensai.db.postgres import init_db, test_postgres_connection

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger("sensai")

# Create FastAPI app
app = FastAPI(
    title="SensAI Career Assistant",
    description="""
    AI career coaching backend.

    ## Features
    - **Onboarding**: industry / specialization / skills profile
    - **Dashboard**: AI industry insights refreshed weekly
    - **Interview**: AI mock interview quizzes, answer feedback, saved assessments
    - **Resume**: resume builder storage, AI LaTeX editing, PDF compilation
    - **Career**: skill gap analysis, resume review, LeetCode-based coaching

    ## Databases
    - PostgreSQL: users, industry insights, assessments
    - MongoDB: resume documents, coaching reports
    """,
    version=__version__,
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


# Startup event
@app.on_event("startup")
async def startup_event():
    """Create tables and MongoDB indexes on startup."""
    try:
        init_db()
        logger.info("PostgreSQL tables ready")
    except Exception as e:
        logger.warning("PostgreSQL table initialization failed: %s", e)

    try:
        init_mongo_indexes()
        logger.info("MongoDB indexes initialized")
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)


@app.get("/", tags=["Health"])
async def root():
    return {"status": "healthy", "app": "SensAI Career Assistant", "version": __version__}


@app.get("/health", tags=["Health"])
def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "postgres": "connected" if test_postgres_connection() else "disconnected",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
