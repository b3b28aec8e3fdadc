import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from carhub.api.api import api_router
from carhub.core.config import settings

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)-7s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="CarHub API for tracking fill-ups and maintenance of personal vehicles",
    version="0.1.0",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

# Set CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS or ["*"],  # Narrow BACKEND_CORS_ORIGINS in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _describe_validation_error(error: dict) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    message = error.get("msg", "invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    if location:
        return f"{'.'.join(location)}: {message}"
    return message


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report missing or malformed fields as 400 with a readable message."""
    detail = "Bad Request: " + "; ".join(_describe_validation_error(e) for e in exc.errors())
    logger.info(f"{request.method} {request.url.path} rejected: {detail}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)

@app.get("/")
async def root():
    """Root endpoint with basic service information."""
    return {
        "message": "Welcome to CarHub API",
        "version": "0.1.0",
        "docs_url": "/docs",
    }

@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    logger.info(f"Starting CarHub API (auth mode: {settings.AUTH_MODE})")
    if settings.AUTH_MODE == "google" and not settings.GOOGLE_CLIENT_ID:
        logger.warning("GOOGLE_CLIENT_ID is not set; authenticated requests will fail")
    # Tables are created by setup_db.py, not on startup

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("carhub.main:app", host="0.0.0.0", port=8000, reload=True)
