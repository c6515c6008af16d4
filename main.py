from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from linkhub_app.config import settings
from linkhub_app.api import manage, redirect, shorten
from linkhub_app.dependencies import get_mapping_store
from linkhub_app.exceptions import LinkHubError
from linkhub_app.schemas.url import ShortenResponse
from linkhub_app.storage.seed import seed_demo_data

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.dev.ConsoleRenderer() if settings.debug else structlog.processors.JSONRenderer(),
    ],
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("linkhub_starting", base_url=settings.base_url, environment=settings.environment)
    if settings.seed_demo_data:
        added = seed_demo_data(get_mapping_store())
        logger.info("demo_data_seeded", added=added)
    yield
    logger.info("linkhub_shutting_down")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="A URL shortener with click analytics built with FastAPI",
    debug=settings.debug,
    lifespan=lifespan
)


@app.exception_handler(LinkHubError)
async def linkhub_error_handler(request: Request, exc: LinkHubError):
    """Render domain errors as {"message": ...} with their HTTP status"""
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


def _describe(error: dict) -> str:
    """One pydantic error as `field: message`, e.g. `originalUrl: Input should be a valid string`"""
    # loc starts with where the value came from: body, query, path or header
    field = ".".join(str(part) for part in error["loc"][1:])
    return f"{field}: {error['msg']}" if field else error["msg"]


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies and parameters are a 400 like any other validation failure"""
    message = "; ".join(_describe(error) for error in exc.errors()) or "Invalid request"
    logger.info("request_rejected", path=request.url.path, message=message)

    if request.url.path == "/shorten":
        content = ShortenResponse(success=False, message=message).model_dump(mode="json", by_alias=True)
    else:
        content = {"message": message}
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=content)


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
# The catch-all redirect goes last so it never shadows a fixed path
app.include_router(manage.router)
app.include_router(shorten.router)
app.include_router(redirect.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
