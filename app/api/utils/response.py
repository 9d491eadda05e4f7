"""
JSON envelopes shared by the Storefront CMS API routes.

Single-resource routes (product detail, login, registration) answer with
``{status_code, success, message, data}``; every failure, whether raised in a
route or caught by the global handlers, answers with
``{status_code, status: false, message, detail[, errors]}`` where ``detail``
carries the machine-readable error code.

The products list is the exception: it returns the bare
``{data, pagination}`` body built by ``PaginatedResponse``.
"""

from typing import Any, Optional
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(status_code: int, message: str, data: Optional[Any] = None) -> JSONResponse:
    """
    Wrap a route result in the success envelope.

    Args:
        status_code (int): HTTP status code, echoed in the body
        message (str): Localized confirmation, e.g. "Product retrieved successfully"
        data (Any, optional): Serialized resource; omitted from the body when None

    Returns:
        JSONResponse: Success envelope
    """
    body = {"status_code": status_code, "success": True, "message": message}
    if data is not None:
        body["data"] = data
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def error_response(
    status_code: int,
    message: str = "An error occurred",
    detail: Optional[str] = None,
    errors: Optional[Any] = None,
) -> JSONResponse:
    """
    Build the error envelope.

    Args:
        status_code (int): HTTP status code, echoed in the body
        message (str): Human-readable, localized where the route knows the locale
        detail (str, optional): Error code such as ``PRODUCT_NOT_FOUND``
        errors (Any, optional): Per-field failures, e.g. rejected ``page``/``pageSize`` values

    Returns:
        JSONResponse: Error envelope
    """
    body = {"status_code": status_code, "status": False, "message": message}
    if detail is not None:
        body["detail"] = detail
    if errors:
        body["errors"] = jsonable_encoder(errors)
    return JSONResponse(status_code=status_code, content=body)
