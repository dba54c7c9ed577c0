from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ============================================================================
# Enums
# ============================================================================


class EncodingMethod(str, Enum):
    """Supported text transforms, by their wire name."""

    SUBSTITUTION = "simple"
    CAESAR = "caesar"
    BASE64 = "base64"
    EMOJI = "emoji"


class DecodeSource(str, Enum):
    """Where the decode pipeline got its method from."""

    METADATA = "metadata"
    SELECTED = "selected"
    DETECTED = "detected"
    RECOVERED = "recovered"


# ============================================================================
# Envelope Schemas
# ============================================================================


class MessageMetadata(BaseModel):
    """
    Descriptor carried in the envelope after the `||` separator.

    Field names on the wire are camelCase and must stay exactly as they are:
    `type`, `passwordProtected`, `selfDestruct`, `shift`, `messageId`,
    `customEncryption`.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    method: EncodingMethod = Field(alias="type")
    password_protected: bool = Field(default=False, alias="passwordProtected")
    self_destruct: bool = Field(default=False, alias="selfDestruct")
    shift: int | None = Field(default=None, ge=1, le=25)
    message_id: str | None = Field(default=None, alias="messageId", min_length=1)
    custom_encryption: bool = Field(default=False, alias="customEncryption")

    @model_validator(mode="after")
    def _check_optional_fields(self) -> "MessageMetadata":
        if (self.shift is not None) != (self.method == EncodingMethod.CAESAR):
            raise ValueError("shift must be present for caesar and only for caesar")
        if (self.message_id is not None) != self.self_destruct:
            raise ValueError("messageId must be present iff selfDestruct is set")
        return self

    def to_wire(self) -> str:
        """Serialize to compact JSON with wire field names, omitting absent optionals."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


# ============================================================================
# Detection Schemas
# ============================================================================


class DetectionReport(BaseModel):
    """Outcome of method detection on a raw message."""

    method: EncodingMethod
    method_name: str
    method_description: str
    shift: int | None = None
    password_protected: bool
    self_destruct: bool = False
    custom_encryption: bool = False
    from_metadata: bool
    reasoning: list[str] = []


# ============================================================================
# Request Schemas
# ============================================================================


class EncodeRequest(BaseModel):
    """Request schema for /encode endpoint."""

    text: str = Field(min_length=1, max_length=100_000)
    method: EncodingMethod = EncodingMethod.SUBSTITUTION
    shift: int | None = Field(default=None, ge=1, le=25)
    custom_key: str | None = None
    password: str | None = None
    self_destruct: bool = False


class DecodeRequest(BaseModel):
    """Request schema for /decode endpoint."""

    message: str = Field(min_length=1, max_length=200_000)
    password: str | None = None
    custom_key: str | None = None
    method: EncodingMethod | None = None
    shift: int | None = Field(default=None, ge=0, le=25)
    session_id: str | None = Field(default=None, max_length=128)


class DetectRequest(BaseModel):
    """Request schema for /detect endpoint."""

    message: str = Field(min_length=1, max_length=200_000)


class QRCodeRequest(BaseModel):
    """Request schema for /share/qr endpoint."""

    envelope: str = Field(min_length=1, max_length=4_000)


# ============================================================================
# Response Schemas
# ============================================================================


class EncodeResponse(BaseModel):
    """Response schema for /encode endpoint."""

    envelope: str
    share_url: str
    qr_payload: str
    method: EncodingMethod
    shift: int | None = None
    password_protected: bool
    custom_encryption: bool
    self_destruct: bool
    message_id: str | None = None


class DecodeResponse(BaseModel):
    """Response schema for /decode endpoint."""

    plaintext: str
    method: EncodingMethod
    shift: int | None = None
    source: DecodeSource
    explanation: str
    self_destruct: bool = False
    countdown_seconds: float | None = None


class DetectResponse(BaseModel):
    """Response schema for /detect endpoint."""

    report: DetectionReport


class SelfDestructStatusResponse(BaseModel):
    """Ledger entry for a self-destructing message."""

    model_config = ConfigDict(from_attributes=True)

    message_id: str
    viewed: bool
    created_at: datetime
    viewed_at: datetime | None = None


# ============================================================================
# Error Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)
