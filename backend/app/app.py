"""FastAPI application."""

import argparse
import logging
from typing import Dict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from configs import settings
from src.controllers.product_controllers import product_router
from src.logger_config import get_logger
from src.models.product_models import ErrorResponse
from src.services.extraction.errors import ValidationError

logging.basicConfig(level=settings.LOG_LEVEL)
logger = get_logger("api")

logger.info("Starting FastAPI application...")
app = FastAPI(
    title="Trendyol Price Watch API",
    root_path=settings.ROOT_PATH_BACKEND,
    description="Extracts product, price and stock data from Trendyol pages.",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
app.include_router(product_router)


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Answer malformed request bodies with the same error object as bad URLs."""
    logger.info("Invalid request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorResponse(error=ValidationError.default_message).model_dump(),
    )


@app.get("/", response_description="Api healthcheck")  # type: ignore[misc]
async def index() -> Dict[str, str]:
    """Define a route for handling HTTP GET requests to the root URL ("/")."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    parser = argparse.ArgumentParser()
    parser.add_argument("--host", default="127.0.0.1", help="Application host.")
    parser.add_argument("--port", default="8000", help="Application port.")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development purposes.",
    )
    args = parser.parse_args()

    uvicorn.run("app:app", host=args.host, port=int(args.port), reload=args.reload)
