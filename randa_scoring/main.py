from datetime import datetime, timezone

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

load_dotenv()

from randa_scoring.config import get_settings
from randa_scoring.core.exceptions import ScoringException
from randa_scoring.core.logging import configure_logging
from randa_scoring.models.evaluation import ErrorResponse
from randa_scoring.routers.evaluations import router as evaluations_router
from randa_scoring.routers.health import router as health_router

settings = get_settings()
configure_logging(settings)


# SWAGGER UI — tag display order
_OPENAPI_TAGS = [
    {"name": "Root"},
    {"name": "Health"},
    {"name": "Evaluations"},
]


# EXCEPTION HANDLERS
def _error_body(error_code: str, message: str, details=None) -> dict:
    return ErrorResponse(
        error_code=error_code,
        message=message,
        details=details,
        timestamp=datetime.now(timezone.utc),
    ).model_dump(mode="json")


async def scoring_exception_handler(request: Request, exc: ScoringException):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body("SCORING_ERROR", str(exc), {"type": type(exc).__name__}),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors and "json_invalid" in errors[0].get("type", ""):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("INVALID_REQUEST", "Malformed JSON request body"),
        )
    details = None
    if errors:
        err = errors[0]
        field = ".".join(str(l) for l in err.get("loc", []) if l != "body")
        details = {"field": field, "type": err.get("type", "")}
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body("VALIDATION_ERROR", "Request validation failed", details),
    )


# FASTAPI APPLICATION CONFIGURATION
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    openapi_tags=_OPENAPI_TAGS,
    debug=settings.DEBUG,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# REGISTER EXCEPTION HANDLERS
app.add_exception_handler(ScoringException, scoring_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# REGISTER ROUTERS
app.include_router(health_router)
app.include_router(evaluations_router, prefix=settings.API_V1_PREFIX)


# ROOT ENDPOINT
@app.get("/", tags=["Root"], summary="Root endpoint")
def root():
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": {
            "swagger": "/docs",
            "redoc": "/redoc"
        },
        "status": "running"
    }


# RUN WITH UVICORN
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "randa_scoring.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
    )
