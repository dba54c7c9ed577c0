from collections.abc import Callable
from dataclasses import dataclass

from loguru import logger

from app.core.exceptions import EmptyMessageError, InvalidShiftError, SeparatorCollisionError
from app.models.schemas import EncodingMethod, MessageMetadata
from app.services.envelope.metadata_envelope import separator_collides, wrap
from app.services.protection.custom_key import apply_custom_key, has_custom_key
from app.services.protection.password import is_blank_password, protect
from app.services.selfdestruct.ids import generate_message_id
from app.services.selfdestruct.ledger import SelfDestructLedger
from app.services.transforms.caesar import CaesarTransform
from app.services.transforms.registry import TransformRegistry


@dataclass
class EncodeResult:
    """Everything produced by one encode call."""

    envelope: str
    payload: str
    metadata: MessageMetadata

    @property
    def message_id(self) -> str | None:
        return self.metadata.message_id


class EncodePipeline:
    """
    Layers a message for sharing.

    Order matters and is fixed: base transform, then the custom-key shift,
    then the password mask, then the metadata descriptor. Decoding peels
    the layers off in reverse.
    """

    def __init__(
        self,
        ledger: SelfDestructLedger,
        id_factory: Callable[[], str] = generate_message_id,
    ):
        self.ledger = ledger
        self.id_factory = id_factory
        self.registry = TransformRegistry()

    def encode(
        self,
        text: str,
        method: EncodingMethod,
        shift: int | None = None,
        custom_key: str | None = None,
        password: str | None = None,
        self_destruct: bool = False,
    ) -> EncodeResult:
        """
        Encode `text` and wrap it in a self-describing envelope.

        Args:
            text: The plaintext
            method: Base transform
            shift: Caesar shift (Caesar only; defaults to 3)
            custom_key: Optional key for an extra Caesar layer
            password: Optional password for the XOR mask
            self_destruct: Register the message for single viewing

        Returns:
            EncodeResult with the envelope string

        Raises:
            EmptyMessageError: If `text` is empty
            InvalidShiftError: If the Caesar shift is a multiple of 26
            SeparatorCollisionError: If the payload contains the envelope separator
        """
        if not text:
            raise EmptyMessageError()

        transform = self.registry.require(method)

        canonical_shift = None
        if method == EncodingMethod.CAESAR:
            canonical_shift = CaesarTransform().canonical_shift(shift)
            if canonical_shift == 0:
                raise InvalidShiftError(shift if shift is not None else 0)

        # 1. Base transform
        payload = transform.encode(text, canonical_shift)

        # 2. Custom key shift
        custom_encryption = has_custom_key(custom_key)
        if custom_encryption:
            payload = apply_custom_key(payload, custom_key)

        # 3. Password mask
        password_protected = not is_blank_password(password)
        if password_protected:
            payload = protect(payload, password)

        # The payload must split cleanly away from its descriptor
        if separator_collides(payload):
            raise SeparatorCollisionError(method.value)

        # 4. Self-destruct registration happens before the envelope exists
        message_id = None
        if self_destruct:
            message_id = self.id_factory()
            self.ledger.register(message_id)

        # 5. Metadata
        metadata = MessageMetadata(
            method=method,
            password_protected=password_protected,
            self_destruct=self_destruct,
            shift=canonical_shift,
            message_id=message_id,
            custom_encryption=custom_encryption,
        )

        logger.debug(
            "Encoded message: method={} password={} custom_key={} self_destruct={}",
            method.value,
            password_protected,
            custom_encryption,
            self_destruct,
        )

        return EncodeResult(envelope=wrap(payload, metadata), payload=payload, metadata=metadata)
