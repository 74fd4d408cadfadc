"""FastAPI application setup module."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from sales_api.settings import settings
from sales_api.database.database import dispose_engine
from sales_api.exceptions.api_exception import APIException
from sales_api.endpoints.analytics import router as analytics_router
from sales_api.endpoints.transactions import router as transactions_router

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the database engine for the lifetime of the process."""
    logger.info("Starting %s", app.title)
    yield
    await dispose_engine()
    logger.info("Database connections closed")


app = FastAPI(
    title="Sales Transactions API",
    description="Monthly transaction listing and sales analytics",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException) -> PlainTextResponse:
    """Render API errors as plain text."""
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


# Include routers
app.include_router(transactions_router)
app.include_router(analytics_router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
