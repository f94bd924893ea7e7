"""
Menu API main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from menu_api.core import configure_cors, lifespan, register_middlewares
from menu_api.routers import all_routers
from shared.config.logging import menu_api_logger as logger
from shared.config.settings import settings
from shared.infrastructure.correlation import CorrelationIdMiddleware
from shared.security.rate_limit import limiter, rate_limit_exceeded_handler
from shared.utils.exceptions import ErrorKind


def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Malformed bodies and parameters answer 400 with the failure envelope.
    """
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    detail = "; ".join(problems) or "Invalid request"
    logger.warning("Request validation failed", path=request.url.path, detail=detail)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": detail, "kind": ErrorKind.VALIDATION.value},
    )


def create_app() -> FastAPI:
    """Build the application with middlewares, handlers and routers."""
    application = FastAPI(
        title="Menu API",
        description="Restaurant menu management API",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Rate limiting
    application.state.limiter = limiter
    application.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    application.add_exception_handler(RequestValidationError, request_validation_handler)

    register_middlewares(application)
    application.add_middleware(CorrelationIdMiddleware)
    configure_cors(application)

    for router in all_routers:
        application.include_router(router)

    return application


app = create_app()


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "menu_api.main:app",
        host="0.0.0.0",
        port=settings.api_port,
        reload=True,
    )
