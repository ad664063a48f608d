# invoicer/api/v1/envelope.py
"""
Every v1 response, success or failure, has the same top-level keys::

    {"status": "ok" | "error", "data": ..., "message": ..., "errors": [...]}

Money is ``Decimal`` throughout, so bodies are dumped in JSON mode and
amounts reach the client as strings ("1180.00"), never as floats.
"""

from __future__ import annotations

from typing import Any, Generic, Iterable, Mapping, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ErrorDetail(BaseModel):
    field: str | None = None
    message: str


class Envelope(BaseModel, Generic[T]):
    status: str = "ok"
    data: T | None = None
    message: str | None = None
    errors: list[ErrorDetail] | None = None


class Page(BaseModel, Generic[T]):
    items: list[T]
    total: int
    limit: int
    offset: int
    has_more: bool


def _dump(envelope: Envelope) -> dict:
    return envelope.model_dump(mode="json")


def ok(data: Any = None, message: str | None = None) -> dict:
    return _dump(Envelope(data=data, message=message))


def error(message: str, errors: Iterable[ErrorDetail | Mapping[str, Any]] | None = None) -> dict:
    details = None
    if errors is not None:
        details = [e if isinstance(e, ErrorDetail) else ErrorDetail(**e) for e in errors]
    return _dump(Envelope(status="error", message=message, errors=details))


def paginated(items: list, total: int, limit: int, offset: int) -> dict:
    """``has_more`` is true while rows remain past this page."""
    page = Page(items=items, total=total, limit=limit, offset=offset, has_more=offset + limit < total)
    return _dump(Envelope(data=page))


def validation_details(raw_errors: Iterable[Mapping[str, Any]]) -> list[ErrorDetail]:
    """
    Flatten FastAPI/pydantic validation errors. The location drops the
    ``body``/``query`` prefix, so an item rate error reads ``items.0.rate``.
    """
    details = []
    for err in raw_errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        details.append(ErrorDetail(field=".".join(loc) or None, message=err.get("msg", "Invalid value")))
    return details
