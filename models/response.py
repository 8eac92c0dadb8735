"""MinifyResponse Pydantic model."""

from pydantic import BaseModel


class MinifyResponse(BaseModel):
    """Response body for the POST /minify endpoint.

    ``alias_map`` is keyed by attribute kind, then original value, in rank
    order.  ``skipped`` lists paths whose extension has no dialect; they are
    not echoed back in ``files``.
    """

    files: dict[str, str]
    alias_map: dict[str, dict[str, str]]
    skipped: list[str] = []
