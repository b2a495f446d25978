"""Version Schema - payload of GET /version."""

from pydantic import BaseModel


class VersionResponse(BaseModel):
    """The API version resolved for the current request."""
    version: int
