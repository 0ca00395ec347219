"""Product check endpoint.

Receives a product URL, runs the extraction service and returns the
normalized record or an error object.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.models.product_models import CheckStockRequest, ErrorResponse, ProductRecord
from src.services.extraction.errors import ExtractionError, ProductCheckError
from src.services.extraction.service import (
    ProductExtractionService,
    get_extraction_service,
)

logger = logging.getLogger("product.controller")

product_router = APIRouter(prefix="/api", tags=["Products"])


def error_response(error: ProductCheckError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=ErrorResponse(error=error.message).model_dump(),
    )


@product_router.post(
    "/check-stock",
    response_model=ProductRecord,
    response_model_exclude_none=True,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
def check_stock(
    data: CheckStockRequest,
    service: ProductExtractionService = Depends(get_extraction_service),
) -> Any:
    """
    Check a product page.

    Args:
        data (CheckStockRequest): Body with the product URL.

    Returns:
        ProductRecord on success, otherwise an ErrorResponse with status
        400, 502 or 500.
    """
    try:
        return service.check(data.url)
    except ProductCheckError as e:
        return error_response(e)
    except Exception:
        logger.exception("Stock check failed for %r", data.url)
        return error_response(ExtractionError())
