# FastAPI entry point for the NeuroStep quiz service
# neurostep/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import os
import sys

# Add project root to sys.path to allow for absolute imports
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from neurostep.endpoints import (
    courses as courses_router,
    quiz as quiz_router,
    users as users_router,
)
from neurostep.services.catalog import course_catalog
from neurostep.utils.config import settings
from neurostep.utils.logger import logger
from neurostep.utils.db import engine, init_models
from neurostep.models.user import Base

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    logger.info("NeuroStep quiz API starting up...")

    await init_models(Base)

    logger.info("Loading course catalog...")
    course_catalog.load_courses(settings.course_catalog_path)
    logger.info(f"Catalog ready with {len(course_catalog.get_all_courses())} courses.")

    logger.info("Startup complete.")
    yield
    logger.info("NeuroStep quiz API shutting down...")
    await engine.dispose()

app = FastAPI(
    title="NeuroStep Quiz API",
    description="Quiz sessions, scoring and learner progress for NeuroStep courses.",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this to your frontend's domain
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(courses_router.router, prefix="/courses", tags=["Courses"])
app.include_router(quiz_router.router, prefix="/quiz", tags=["Quiz"])
app.include_router(users_router.router, prefix="/users", tags=["Users"])

@app.get("/")
async def root():
    return {"message": "Welcome to the NeuroStep Quiz API"}
