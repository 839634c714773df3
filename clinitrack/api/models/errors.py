"""Problem-details style error body shared by all routes."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """RFC 7807 style error body used as HTTPException detail.

    `retryable` lets the client tell a transient store outage apart
    from a record that is permanently gone.
    """

    type: str = Field(..., description="Error type URI")
    title: str = Field(..., description="Short summary")
    status: int = Field(..., description="HTTP status code")
    detail: str = Field(..., description="Human-readable explanation")
    instance: str = Field(..., description="Request URL")
    retryable: bool = Field(False, description="Whether retrying may succeed")
    candidates: list[str] = Field(
        default_factory=list,
        description="Archive ids to choose from when a match is ambiguous",
    )
