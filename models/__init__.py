"""Public re-exports of the HTTP model types."""

from models.request import MinifyRequest
from models.response import MinifyResponse

__all__ = [
    "MinifyRequest",
    "MinifyResponse",
]
