from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, PlainSerializer

# Amounts go out as JSON numbers, not the pydantic default of strings
Money = Annotated[
    Decimal,
    PlainSerializer(lambda value: float(value), return_type=float, when_used="json"),
]


def require_text(value: str) -> str:
    """Reject empty and whitespace-only strings."""
    if not value or not value.strip():
        raise ValueError("must not be blank")
    return value


class ErrorResponse(BaseModel):
    """Error envelope shared by every failing response."""
    status: int
    error: str
    message: Optional[str] = None
