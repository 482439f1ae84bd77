# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Translate domain errors into HTTP responses with a structured detail.
"""

from fastapi import HTTPException

from treating_calendar.core.errors import (
    PastAssignmentError,
    PersistenceError,
    TreatingError,
)


def to_http(exc: TreatingError) -> HTTPException:
    if isinstance(exc, KeyError):
        status = 404
    elif isinstance(exc, PastAssignmentError):
        status = 409
    elif isinstance(exc, PersistenceError):
        status = 503
    else:
        status = 400
    return HTTPException(status_code=status, detail=exc.to_detail())
