"""Custom exceptions and centralized FastAPI error handlers."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class HotelGatewayError(Exception):
    """Base exception with HTTP status code."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.status_code = status_code


class MissingParameterError(HotelGatewayError):
    def __init__(self, name: str):
        super().__init__(f"query '{name}' is required", status_code=400)
        self.name = name


class InvalidParameterError(HotelGatewayError):
    def __init__(self, name: str, reason: str):
        super().__init__(f"query '{name}' is invalid: {reason}", status_code=400)
        self.name = name


class SupplierConfigError(HotelGatewayError):
    """The supplier registry could not be loaded."""


class SupplierError(HotelGatewayError):
    """A single supplier could not deliver offers for this request."""

    def __init__(
        self,
        message: str,
        supplier: str | None = None,
        url: str | None = None,
        status_code: int = 502,
    ):
        source = f"Supplier {supplier}" if supplier else f"Supplier at {url}"
        super().__init__(f"{source}: {message}", status_code=status_code)
        self.supplier = supplier
        self.url = url


class SupplierFetchError(SupplierError):
    pass


class SupplierTimeoutError(SupplierError):
    def __init__(self, timeout: float, supplier: str | None = None, url: str | None = None):
        super().__init__(f"timed out after {timeout:g}s", supplier=supplier, url=url, status_code=504)


class SupplierResponseError(SupplierError):
    pass


def register_error_handlers(app: FastAPI) -> None:
    """Register centralized exception handlers on the FastAPI app."""

    @app.exception_handler(HotelGatewayError)
    async def handle_gateway_error(_request: Request, exc: HotelGatewayError):
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(_request: Request, exc: RequestValidationError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(ValueError)
    async def handle_value_error(_request: Request, exc: ValueError):
        return JSONResponse({"error": str(exc)}, status_code=400)

    @app.exception_handler(Exception)
    async def handle_unexpected(_request: Request, exc: Exception):
        logger.exception("Unhandled error: %s", exc)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
        )
