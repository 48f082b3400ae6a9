"""Status code translation.

Maps gRPC status codes (google.rpc.Code) to a display message and the
HTTP status they correspond to. The HTTP status only decides whether a
span counts as a client (4xx) or server (5xx) failure.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import NamedTuple

import grpc


class CodeDetails(NamedTuple):
    """Message and HTTP-equivalent status of a status code."""

    message: str
    status: int


# https://github.com/googleapis/googleapis/blob/master/google/rpc/code.proto
_STATUS_CODES: dict[int, CodeDetails] = {
    grpc.StatusCode.OK.value[0]: CodeDetails("OK", HTTPStatus.OK),
    grpc.StatusCode.CANCELLED.value[0]: CodeDetails("CANCELLED", 499),
    grpc.StatusCode.UNKNOWN.value[0]: CodeDetails(
        "UNKNOWN", HTTPStatus.INTERNAL_SERVER_ERROR
    ),
    grpc.StatusCode.INVALID_ARGUMENT.value[0]: CodeDetails(
        "INVALID_ARGUMENT", HTTPStatus.BAD_REQUEST
    ),
    grpc.StatusCode.DEADLINE_EXCEEDED.value[0]: CodeDetails(
        "DEADLINE_EXCEEDED", HTTPStatus.GATEWAY_TIMEOUT
    ),
    grpc.StatusCode.NOT_FOUND.value[0]: CodeDetails("NOT_FOUND", HTTPStatus.NOT_FOUND),
    grpc.StatusCode.ALREADY_EXISTS.value[0]: CodeDetails(
        "ALREADY_EXISTS", HTTPStatus.CONFLICT
    ),
    grpc.StatusCode.PERMISSION_DENIED.value[0]: CodeDetails(
        "PERMISSION_DENIED", HTTPStatus.FORBIDDEN
    ),
    grpc.StatusCode.RESOURCE_EXHAUSTED.value[0]: CodeDetails(
        "RESOURCE_EXHAUSTED", HTTPStatus.TOO_MANY_REQUESTS
    ),
    grpc.StatusCode.FAILED_PRECONDITION.value[0]: CodeDetails(
        "FAILED_PRECONDITION", HTTPStatus.BAD_REQUEST
    ),
    grpc.StatusCode.ABORTED.value[0]: CodeDetails("ABORTED", HTTPStatus.CONFLICT),
    grpc.StatusCode.OUT_OF_RANGE.value[0]: CodeDetails(
        "OUT_OF_RANGE", HTTPStatus.BAD_REQUEST
    ),
    grpc.StatusCode.UNIMPLEMENTED.value[0]: CodeDetails(
        "UNIMPLEMENTED", HTTPStatus.NOT_IMPLEMENTED
    ),
    grpc.StatusCode.INTERNAL.value[0]: CodeDetails(
        "INTERNAL", HTTPStatus.INTERNAL_SERVER_ERROR
    ),
    grpc.StatusCode.UNAVAILABLE.value[0]: CodeDetails(
        "UNAVAILABLE", HTTPStatus.SERVICE_UNAVAILABLE
    ),
    grpc.StatusCode.DATA_LOSS.value[0]: CodeDetails(
        "DATA_LOSS", HTTPStatus.NOT_IMPLEMENTED
    ),
    grpc.StatusCode.UNAUTHENTICATED.value[0]: CodeDetails(
        "UNAUTHENTICATED", HTTPStatus.UNAUTHORIZED
    ),
}


def status_code_value(code: int | grpc.StatusCode) -> int:
    """Return the numeric value of ``code``."""
    if isinstance(code, grpc.StatusCode):
        return code.value[0]  # type: ignore[no-any-return]
    return int(code)


def translate_status(code: int | grpc.StatusCode) -> CodeDetails:
    """Return the message and HTTP-equivalent status of ``code``.

    Codes outside the table are reported as ``ERR_CODE_<code>`` with a 500
    status, so they count as server-side failures.
    """
    value = status_code_value(code)
    details = _STATUS_CODES.get(value)
    if details is None:
        return CodeDetails(f"ERR_CODE_{value}", HTTPStatus.INTERNAL_SERVER_ERROR)
    return details
