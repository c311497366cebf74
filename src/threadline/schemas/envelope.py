from typing import Any
from pydantic import BaseModel

class Envelope(BaseModel):
    """Uniform success wrapper; ``data`` is omitted when there is nothing to return."""
    code: int
    status: str = "success"
    message: str
    data: Any = None


class ErrorEnvelope(BaseModel):
    code: int
    status: str = "error"
    error: str
    message: str
