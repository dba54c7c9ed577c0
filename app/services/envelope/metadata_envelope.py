"""
Metadata envelope: `<payload>||<base64(json(metadata))>`.

The descriptor after the separator makes an encoded message self-describing.
Parsing never fails loudly: anything that does not split cleanly into a
payload and a valid descriptor is treated as a bare payload.
"""

import base64
import binascii
import json
from dataclasses import dataclass

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import MalformedMetadataError
from app.models.schemas import MessageMetadata

SEPARATOR = "||"


@dataclass(frozen=True)
class Envelope:
    """A message split into its payload and optional descriptor."""

    payload: str
    metadata: MessageMetadata | None

    @property
    def has_metadata(self) -> bool:
        return self.metadata is not None


def wrap(payload: str, metadata: MessageMetadata) -> str:
    """Append the Base64-encoded JSON descriptor to the payload."""
    encoded = base64.b64encode(metadata.to_wire().encode("utf-8")).decode("ascii")
    return f"{payload}{SEPARATOR}{encoded}"


def separator_collides(payload: str) -> bool:
    """True if `payload` would not come back intact from unwrap(wrap(payload))."""
    return SEPARATOR in payload or payload.endswith(SEPARATOR[0])


def unwrap(message: str) -> Envelope:
    """
    Split an envelope into payload and metadata.

    Exactly one separator is required. If the descriptor cannot be parsed,
    the entire original message is the payload, since ordinary text may
    contain the separator.
    """
    parts = message.split(SEPARATOR)
    if len(parts) != 2:
        return Envelope(payload=message, metadata=None)

    try:
        metadata = parse_metadata(parts[1])
    except MalformedMetadataError as e:
        logger.debug("Ignoring envelope descriptor: {}", e.message)
        return Envelope(payload=message, metadata=None)

    return Envelope(payload=parts[0], metadata=metadata)


def parse_metadata(encoded: str) -> MessageMetadata:
    """
    Decode and validate a descriptor.

    Raises:
        MalformedMetadataError: If the descriptor is not Base64, not JSON,
            or violates the metadata invariants
    """
    try:
        raw = base64.b64decode(encoded, validate=True)
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError) as e:
        raise MalformedMetadataError("Descriptor is not Base64-encoded JSON") from e

    if not isinstance(data, dict):
        raise MalformedMetadataError("Descriptor is not a JSON object")

    try:
        return MessageMetadata.model_validate(data)
    except PydanticValidationError as e:
        raise MalformedMetadataError(
            "Descriptor failed validation",
            {"errors": e.error_count()},
        ) from e
