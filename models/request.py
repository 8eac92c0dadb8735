"""MinifyRequest Pydantic model with strict validation (extra=forbid)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class MinifyRequest(BaseModel):
    """Incoming request body for the POST /minify endpoint.

    ``files`` maps a relative path to its text; the path extension selects
    the dialect.  Key order is the corpus order.
    Extra fields are rejected with a 422 response.
    """

    model_config = ConfigDict(extra="forbid")

    files: dict[str, str]
    attributes: Optional[list[str]] = None
