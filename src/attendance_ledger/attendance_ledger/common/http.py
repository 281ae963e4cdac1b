from __future__ import annotations

import logging

from flask import jsonify

from ..core.exceptions import (
    IneligibleStudentError,
    NotFound,
    NotReachable,
    Rejected,
    StoreError,
    StudentNotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (StudentNotFoundError, 404),
    (NotFound, 404),
    (IneligibleStudentError, 409),
    (Rejected, 422),
    (NotReachable, 503),
)


def error_response(exc: Exception):
    """JSON failure body for a domain or store error; unexpected errors become 500."""

    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            body = {"success": False, "message": str(exc), "error": error_type.__name__}
            if isinstance(exc, StoreError) and exc.table:
                body["table"] = exc.table
            return jsonify(body), code

    logger.exception("Unhandled error")
    return jsonify({"success": False, "message": "Internal error", "error": "InternalError"}), 500
