# =============================================================================
# app/responses.py - Success Envelope
# =============================================================================
# Every successful response has the same shape:
#
#   {
#       "success": true,
#       "message": "Data retrieved successfully",
#       "data": {...} | [...] | null,
#       "pagination": {...}            # list endpoints only
#   }
#
# Pydantic payloads are serialized with their camelCase aliases.
# =============================================================================

from collections.abc import Iterable
from typing import Any, Optional

from pydantic import BaseModel

from core.models.pagination import PageRequest, PaginationMeta

# Default message per HTTP verb
DEFAULT_MESSAGES = {
    "GET": "Data retrieved successfully",
    "POST": "Resource created successfully",
    "PUT": "Resource updated successfully",
    "PATCH": "Resource updated successfully",
    "DELETE": "Resource deleted successfully",
}
FALLBACK_MESSAGE = "Request completed successfully"


def default_message(method: str) -> str:
    return DEFAULT_MESSAGES.get(method.upper(), FALLBACK_MESSAGE)


def _serialize(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, (list, tuple)):
        return [_serialize(item) for item in data]
    return data


def envelope(
    data: Any = None,
    message: Optional[str] = None,
    *,
    method: str = "GET",
    pagination: Optional[PaginationMeta] = None,
) -> dict[str, Any]:
    """
    Build the success envelope.

    Args:
        data: Payload (pydantic model, list of models or plain JSON data)
        message: Overrides the default message for `method`
        method: HTTP verb the default message is picked for
        pagination: Pagination metadata for list results
    """
    body: dict[str, Any] = {
        "success": True,
        "message": message or default_message(method),
        "data": _serialize(data),
    }
    if pagination is not None:
        body["pagination"] = pagination.model_dump(mode="json", by_alias=True)
    return body


def ok(data: Any = None, message: Optional[str] = None) -> dict[str, Any]:
    return envelope(data, message, method="GET")


def created(data: Any = None, message: Optional[str] = None) -> dict[str, Any]:
    return envelope(data, message, method="POST")


def updated(data: Any = None, message: Optional[str] = None) -> dict[str, Any]:
    return envelope(data, message, method="PUT")


def deleted(message: Optional[str] = None) -> dict[str, Any]:
    return envelope(None, message, method="DELETE")


def paginated(
    items: Iterable[Any],
    page: PageRequest,
    total: int,
    message: Optional[str] = None,
) -> dict[str, Any]:
    """
    Envelope for one page of a list.

    Example:
        result = service.list(filters, identity)
        return paginated([DiaryResponse.model_validate(r) for r in result.items], result.page, result.total)
    """
    return envelope(
        list(items),
        message,
        method="GET",
        pagination=PaginationMeta.build(page, total),
    )
