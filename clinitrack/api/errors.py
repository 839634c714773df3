"""Translation of domain errors into HTTP responses.

Every route funnels ClinitrackError through `to_http_exception` so the
status codes stay consistent:

- RecordNotFoundError, ArchiveNotFoundError -> 404
- AmbiguousArchiveMatchError -> 409 (with candidate archive ids)
- UnknownDomainError -> 422
- StoreUnavailableError -> 503 (retryable)
"""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from clinitrack.api.models.errors import ErrorResponse
from clinitrack.domain.errors import (
    AmbiguousArchiveMatchError,
    ArchiveNotFoundError,
    RecordNotFoundError,
    StoreUnavailableError,
    UnknownDomainError,
)
from clinitrack.domain.exceptions import ClinitrackError

_ERROR_TYPE_BASE = "https://clinitrack.dev/errors"


def _problem(
    request: Request,
    status_code: int,
    slug: str,
    title: str,
    detail: str,
    *,
    retryable: bool = False,
    candidates: tuple[str, ...] = (),
) -> HTTPException:
    body = ErrorResponse(
        type=f"{_ERROR_TYPE_BASE}/{slug}",
        title=title,
        status=status_code,
        detail=detail,
        instance=str(request.url),
        retryable=retryable,
        candidates=list(candidates),
    )
    return HTTPException(status_code=status_code, detail=body.model_dump())


def to_http_exception(error: ClinitrackError, request: Request) -> HTTPException:
    """Map a domain error to an HTTPException with a problem-details body."""
    if isinstance(error, RecordNotFoundError):
        return _problem(
            request, status.HTTP_404_NOT_FOUND, "record-not-found", "Record Not Found", str(error)
        )
    if isinstance(error, ArchiveNotFoundError):
        return _problem(
            request,
            status.HTTP_404_NOT_FOUND,
            "archive-not-found",
            "Archived Copy Not Found",
            str(error),
        )
    if isinstance(error, AmbiguousArchiveMatchError):
        return _problem(
            request,
            status.HTTP_409_CONFLICT,
            "ambiguous-archive-match",
            "Ambiguous Archive Match",
            str(error),
            candidates=error.candidates,
        )
    if isinstance(error, UnknownDomainError):
        return _problem(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "unknown-domain",
            "Unknown Domain",
            str(error),
        )
    if isinstance(error, StoreUnavailableError):
        return _problem(
            request,
            status.HTTP_503_SERVICE_UNAVAILABLE,
            "store-unavailable",
            "Store Unavailable",
            str(error),
            retryable=True,
        )
    return _problem(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal-error",
        "Internal Error",
        str(error),
    )
