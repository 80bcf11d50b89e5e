from typing import NoReturn

from fastapi import HTTPException, status

from agenda.components.events import EventValidationError

ACCESS_DENIED = "Access denied"


def raise_for_error(error: str | None) -> NoReturn:
    """Map a component error message to the matching HTTP status."""
    if error == ACCESS_DENIED:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=error)
    if error and error.endswith("not found"):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error)
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error or "Bad request")


def raise_for_event_errors(errors: list[EventValidationError]) -> NoReturn:
    codes = {e.code for e in errors}
    if "forbidden" in codes:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=ACCESS_DENIED)
    if codes == {"not_found"} and all(e.field is None for e in errors):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=errors[0].message)
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=[{"code": e.code, "message": e.message, "field": e.field} for e in errors],
    )
