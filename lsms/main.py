from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import os
import logging
from lsms.admin import router as admin_router
from lsms.config import router as config_router
from lsms.health import router as health_router
from lsms.identity import router as identity_router
from lsms.lecturers import router as lecturers_router
from lsms.otp import router as otp_router
from lsms.students import router as students_router
from lsms.config.settings import settings
from lsms.exceptions import LsmsError
from lsms.storage import get_store
from mangum import Mangum

# Configure logging for Lambda
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)

# Force the root logger to INFO level explicitly
logging.getLogger().setLevel(logging.INFO)

# Prevent duplicate logs from uvicorn when running locally
if settings.APP_ENV != 'development':
    logging.getLogger("uvicorn.access").propagate = False
    logging.getLogger("uvicorn.error").propagate = False

logger = logging.getLogger(__name__)


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(LsmsError)
    async def lsms_error_handler(request: Request, exc: LsmsError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": _first_validation_message(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Server error. Please try again later."})


def create_app() -> FastAPI:
    """Create and configure a FastAPI application."""
    logger.info(f"Creating FastAPI app - Environment: {settings.APP_ENV}")

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url=settings.API_DOCS_URL,
        redoc_url=settings.API_REDOC_URL,
        openapi_url=settings.API_OPENAPI_URL
    )

    @app.on_event("startup")
    async def startup_event():
        """Run initialization tasks on application startup"""
        logger.info("FastAPI application starting up...")
        store = get_store()
        logger.info(f"Student records stored under {os.path.abspath(store.base_dir)}")

    # Get CORS origins from environment
    frontend_url = os.getenv("FRONTEND_URL", "")

    allowed_origins = [
        "http://localhost:5500",
        "http://127.0.0.1:5500",
        "http://localhost:3000",
    ]

    if frontend_url:
        allowed_origins.append(frontend_url.rstrip("/"))

    # For development/testing, allow all origins if specified
    if os.getenv("ALLOW_ALL_ORIGINS", "false").lower() == "true":
        allowed_origins = ["*"]

    logger.info(f"CORS allowed origins: {allowed_origins}")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(students_router.router)
    app.include_router(identity_router.router)
    app.include_router(lecturers_router.router)
    app.include_router(otp_router.router)
    app.include_router(admin_router.router)
    app.include_router(config_router.router)
    app.include_router(health_router.router)

    logger.info("FastAPI app created successfully")
    return app

_fastapi_app = create_app()

# Conditionally wrap with Mangum for serverless deployment
if settings.APP_ENV != 'development':
    logger.info("Wrapping FastAPI app with Mangum for Lambda")
    app = Mangum(_fastapi_app)
else:
    app = _fastapi_app # Use the raw FastAPI app for local dev

# For local development
if __name__ == '__main__':
    import uvicorn

    port = settings.PORT
    print(f"Starting FastAPI server on port {port}...")
    print(f"Environment: {settings.APP_ENV}")
    print(f"API Documentation: http://localhost:{port}{settings.API_DOCS_URL}")

    uvicorn.run(_fastapi_app,
                host="0.0.0.0",
                port=port,
                log_level="info",
                access_log=False)
