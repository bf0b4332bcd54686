import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .config import settings
from .database import get_db, init_db
from .core.middleware import ExceptionHandlingMiddleware, register_exception_handlers
from .schemas.result import Result, Error, ErrorCategory

# Import routes
from .api.v1 import roommates, expenses, tasks, messages, budgets, ledger, ai

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"{settings.PROJECT_NAME} API {settings.VERSION} started")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    description="RoomieSync API - Shared expenses, chores and chat for a household",
    lifespan=lifespan,
)

# Add exception handling middleware FIRST
app.add_middleware(ExceptionHandlingMiddleware, log_internal_errors=True)
register_exception_handlers(app)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(
    roommates.router, prefix=f"{settings.API_V1_STR}/roommates", tags=["roommates"]
)
app.include_router(
    expenses.router, prefix=f"{settings.API_V1_STR}/expenses", tags=["expenses"]
)
app.include_router(tasks.router, prefix=f"{settings.API_V1_STR}/tasks", tags=["tasks"])
app.include_router(
    messages.router, prefix=f"{settings.API_V1_STR}/messages", tags=["messages"]
)
app.include_router(budgets.router, prefix=f"{settings.API_V1_STR}", tags=["budgets"])
app.include_router(ledger.router, prefix=f"{settings.API_V1_STR}/ledger", tags=["ledger"])
app.include_router(ai.router, prefix=f"{settings.API_V1_STR}/ai", tags=["ai"])


@app.get("/", response_model=Result[dict])
async def root():
    """Root endpoint with API information"""
    return Result.successful(
        data={
            "message": f"Welcome to {settings.PROJECT_NAME} API",
            "version": settings.VERSION,
            "docs": "/docs",
            "status": "online",
        }
    )


@app.get("/health", response_model=Result[dict])
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint for monitoring"""
    try:
        db.execute(text("SELECT 1"))
        return Result.successful(data={"status": "healthy", "database": "connected"})
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        return Result.failure(
            error=Error(
                message=f"Health check failed: {str(e)}",
                status_code=503,
                category=ErrorCategory.INTERNAL,
            )
        )
