# storefront/api/errors.py
from fastapi import HTTPException

from storefront.domain.errors import (
    CheckoutTimeout,
    EmbeddingUnavailable,
    FormValidationError,
    NotAuthenticated,
    RecordStoreError,
    SearchSuperseded,
)


def to_http(exc: Exception) -> HTTPException:
    """Wyjatek domenowy -> komunikat dla uzytkownika z kodem HTTP."""
    if isinstance(exc, NotAuthenticated):
        return HTTPException(status_code=401, detail=str(exc))
    if isinstance(exc, PermissionError):
        return HTTPException(status_code=403, detail=str(exc))
    if isinstance(exc, LookupError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, SearchSuperseded):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, FormValidationError):
        return HTTPException(status_code=400, detail={"message": str(exc), "fields": exc.fields})
    if isinstance(exc, ValueError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, EmbeddingUnavailable):
        return HTTPException(status_code=503, detail=str(exc))
    if isinstance(exc, CheckoutTimeout):
        return HTTPException(status_code=504, detail=str(exc))
    if isinstance(exc, RecordStoreError):
        return HTTPException(status_code=502, detail=str(exc))
    return HTTPException(status_code=500, detail="Internal error")
