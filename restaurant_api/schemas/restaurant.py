"""
Restaurant API - Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the API contract for the restaurant routes.
Why:   Automatic serialization of store documents and OpenAPI doc generation.
How:   FastAPI uses these as `response_model`s, except RestaurantResponse,
       which only documents List and Get in OpenAPI. Write bodies are NOT parsed
       into models: the validation rule set in services/validation.py runs on
       the raw JSON object so that every violation is reported at once, in
       the rule set's own message format.
"""

from typing import Any, List, Optional

from bson import ObjectId
from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class RestaurantResponse(BaseModel):
    """
    What:  A stored restaurant document as returned by List and Get.
    Why alias `_id`: Clients of the service read the store's own key name.

    Documentation only: List and Get return documents as stored and are not
    filtered through this model. The collection enforces no schema, so the
    four known fields may be missing or hold other types, and extra keys are
    passed through.
    """
    id: str = Field(alias="_id", description="Store-assigned ObjectId as 24-char hex")
    name: Optional[Any] = Field(default=None, description="Restaurant name")
    image: Optional[Any] = Field(default=None, description="Image URL")
    menu: Optional[Any] = Field(default=None, description="Menu items, in order")
    rating: Optional[Any] = Field(default=None, description="Rating between 0 and 5")

    model_config = {"populate_by_name": True, "extra": "allow"}

    @field_validator("id", mode="before")
    @classmethod
    def stringify_object_id(cls, v: Any) -> Any:
        """ObjectId is not JSON-serializable; expose its hex form."""
        if isinstance(v, ObjectId):
            return str(v)
        return v


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. after a delete."""
    message: str = Field(description="Human-readable success message")


class CreateResponse(MessageResponse):
    """
    Returned by POST /restaurant with HTTP 201.

    Carries the generated id so callers need not re-fetch the list to find it.
    """
    message: str = Field(default="Restaurant added successfully")
    id: str = Field(description="Store-assigned id of the new restaurant")


class UpdateResponse(MessageResponse):
    """
    Returned by PUT /restaurant/{id}.

    `modified` is False when the document exists but the supplied values
    already matched the stored ones.
    """
    message: str = Field(default="Restaurant updated successfully")
    modified: bool = Field(description="Whether the stored document changed")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class FieldViolation(BaseModel):
    """One violated validation rule."""
    type: str = Field(default="field")
    value: Optional[Any] = Field(default=None, description="Offending value, omitted when absent")
    msg: str = Field(description="Which rule failed")
    path: str = Field(description="Field name, or 'id' for the path parameter")
    location: str = Field(description="'body' or 'params'")


class ValidationErrorResponse(BaseModel):
    error: str = Field(default="validation_error")
    message: str
    errors: List[FieldViolation]
    request_id: Optional[str] = None


class ErrorResponse(BaseModel):
    """
    Standardized error body for 404 and 500 responses.

    Example:
        {
            "error": "not_found",
            "message": "Restaurant with ID '65f0c0ffee0000000000abcd' was not found",
            "request_id": "1f2e3d4c"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
