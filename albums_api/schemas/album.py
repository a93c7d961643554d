"""
Albums API — Pydantic Request/Response Schemas
===============================================

What:  Pydantic models defining the wire contract of the album routes.
How:   FastAPI decodes request bodies into AlbumPayload and serializes
       AlbumResponse / MessageResponse / HealthResponse on the way out.

Wire format:
    {"id": 1, "title": "Blue", "artist": "Joni Mitchell", "year": 1971}
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Signed 64-bit bounds, the widest integer the store columns hold
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class AlbumPayload(BaseModel):
    """
    What:  JSON body accepted by POST /albumsPost and PUT /albumsPut/{id}.

    Missing fields fall back to zero values ("" / 0). Any other key,
    including "id", is ignored: ids are assigned by the store or taken from
    the URL path.

    Types are matched strictly: "1971" or 1971.0 for year, or a number for
    title, is a decode failure rather than a conversion. Years outside the
    signed 64-bit range are rejected the same way.
    """
    model_config = ConfigDict(strict=True)

    title: str = Field(default="", description="Album title")
    artist: str = Field(default="", description="Performing artist")
    year: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX, description="Release year")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class AlbumResponse(BaseModel):
    """Full representation of an album, as stored or as echoed by update."""
    id: int = Field(description="Store-assigned album identifier")
    title: str = Field(description="Album title")
    artist: str = Field(description="Performing artist")
    year: int = Field(description="Release year")

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Fixed confirmation body returned by DELETE /albumsDelete/{id}."""
    message: str = Field(description="Human-readable confirmation")


class ErrorResponse(BaseModel):
    """
    What:  Body of 500 responses for fatal errors.

    Example:
        {
            "error": "database_error",
            "message": "An internal error occurred. Please try again later.",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and store status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Store connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
