from collections.abc import Callable
from dataclasses import dataclass, field

from loguru import logger

from app.core.exceptions import (
    AlreadyDestructedError,
    CustomKeyRequiredError,
    EmptyMessageError,
    IncorrectPasswordError,
    PasswordRequiredError,
    TransformError,
)
from app.models.schemas import DecodeSource, EncodingMethod, MessageMetadata
from app.services.detection.method_detector import MethodDetector
from app.services.envelope.metadata_envelope import unwrap
from app.services.pipeline.recovery import RecoverySearch
from app.services.preprocessing.text import is_readable, normalize_input
from app.services.protection.custom_key import has_custom_key, remove_custom_key
from app.services.protection.password import is_blank_password, unprotect
from app.services.selfdestruct.countdown import SelfDestructCountdown
from app.services.selfdestruct.ledger import SelfDestructLedger, ViewSession
from app.services.sharing.links import extract_envelope
from app.services.transforms.registry import TransformRegistry

DEFAULT_COUNTDOWN_SECONDS = 3


def prepare_input(raw: str) -> str:
    """Normalize pasted input and reduce QR payloads and share URLs to the envelope."""
    return extract_envelope(normalize_input(raw))


def self_destruct_id(raw: str) -> str | None:
    """Message id of a self-destructing envelope, or None."""
    metadata = unwrap(prepare_input(raw)).metadata
    if metadata is None or not metadata.self_destruct:
        return None
    return metadata.message_id


@dataclass
class DecodeResult:
    """
    A revealed message.

    For self-destructing messages the plaintext is discarded when the
    countdown started by start_countdown() expires, after which `plaintext`
    is None and cannot be recovered from this object.
    """

    plaintext: str | None
    method: EncodingMethod
    shift: int | None
    source: DecodeSource
    explanation: str
    password_protected: bool = False
    custom_encryption: bool = False
    self_destruct: bool = False
    message_id: str | None = None
    countdown_seconds: float | None = None
    _countdown: SelfDestructCountdown | None = field(default=None, repr=False)

    def discard(self) -> None:
        self.plaintext = None

    def start_countdown(
        self,
        on_expire: Callable[[], None] | None = None,
    ) -> SelfDestructCountdown | None:
        """
        Start the self-destruct countdown (no-op for ordinary messages).

        On expiry the plaintext is discarded and then `on_expire` runs so
        the host can tear down its display.
        """
        if not self.self_destruct or self.countdown_seconds is None:
            return None

        def expire() -> None:
            self.discard()
            if on_expire is not None:
                on_expire()

        self._countdown = SelfDestructCountdown(self.countdown_seconds, expire)
        self._countdown.start()
        return self._countdown

    def cancel_countdown(self) -> None:
        if self._countdown is not None:
            self._countdown.cancel()


class DecodePipeline:
    """
    Peels the layers off an envelope.

    Steps, in order:
    1. Reduce QR payloads and share URLs to the envelope
    2. Unwrap the descriptor and refuse already-viewed self-destruct messages
    3. Remove the password mask
    4. Remove the custom-key shift
    5. Reverse the base transform (declared, selected or detected method)
    6. Fall back to brute-force recovery when no method works
    7. Mark self-destruct messages viewed and attach a countdown
    """

    def __init__(
        self,
        ledger: SelfDestructLedger,
        countdown_seconds: float = DEFAULT_COUNTDOWN_SECONDS,
    ):
        self.ledger = ledger
        self.countdown_seconds = countdown_seconds
        self.registry = TransformRegistry()
        self.detector = MethodDetector()
        self.recovery = RecoverySearch()

    def decode(
        self,
        raw: str,
        password: str | None = None,
        custom_key: str | None = None,
        method: EncodingMethod | None = None,
        shift: int | None = None,
        session: ViewSession | None = None,
    ) -> DecodeResult:
        """
        Decode a message.

        Args:
            raw: Envelope, bare payload, QR payload or share URL
            password: Password, if the message is protected
            custom_key: Custom key, if one was used (or to opt in manually)
            method: Method to use when the message carries no metadata
            shift: Caesar shift to use with a caller-selected Caesar method
            session: The caller's view session; without one, any viewed
                self-destruct message is refused

        Returns:
            DecodeResult with the recovered plaintext

        Raises:
            EmptyMessageError: Nothing to decode
            AlreadyDestructedError: Self-destruct message was already viewed
            PasswordRequiredError: Protected message, no password given
            IncorrectPasswordError: Wrong password
            CustomKeyRequiredError: Custom-key message, no key given
            UndecodableMessageError: No method yields readable text
        """
        text = prepare_input(raw)
        if not text:
            raise EmptyMessageError()

        envelope = unwrap(text)
        metadata = envelope.metadata
        payload = envelope.payload

        message_id = self_destruct_id(text)
        if message_id is not None and self._already_destructed(message_id, session):
            logger.warning("Refused to reveal self-destructed message {}", message_id)
            raise AlreadyDestructedError(message_id)

        # Password layer
        if metadata is not None:
            password_protected = metadata.password_protected
        else:
            password_protected = (
                not is_blank_password(password)
                or self.detector.is_likely_password_protected(payload)
            )

        if password_protected:
            if is_blank_password(password):
                raise PasswordRequiredError()
            try:
                payload = unprotect(payload, password)
            except IncorrectPasswordError:
                logger.warning("Incorrect password supplied for message")
                raise

        # Custom key layer
        custom_encryption = bool(metadata and metadata.custom_encryption)
        if custom_encryption and not has_custom_key(custom_key):
            raise CustomKeyRequiredError()
        if has_custom_key(custom_key):
            payload = remove_custom_key(payload, custom_key)
            custom_encryption = True

        result = self._reverse_transform(payload, metadata, method, shift)
        result.password_protected = password_protected
        result.custom_encryption = custom_encryption

        if message_id is not None:
            self.ledger.mark_viewed(message_id)
            if session is not None:
                session.record_displayed(message_id)
            result.self_destruct = True
            result.message_id = message_id
            result.countdown_seconds = self.countdown_seconds

        return result

    def _already_destructed(self, message_id: str, session: ViewSession | None) -> bool:
        if not self.ledger.is_viewed(message_id):
            return False
        return session is None or session.has_displayed(message_id)

    def _reverse_transform(
        self,
        payload: str,
        metadata: MessageMetadata | None,
        method: EncodingMethod | None,
        shift: int | None,
    ) -> DecodeResult:
        if metadata is not None:
            chosen, chosen_shift, source = metadata.method, metadata.shift, DecodeSource.METADATA
        elif method is not None:
            chosen, chosen_shift, source = method, shift, DecodeSource.SELECTED
        else:
            chosen = self.detector.detect_encryption_method(payload)
            chosen_shift, source = None, DecodeSource.DETECTED

        transform = self.registry.require(chosen)
        usable = not (transform.requires_shift and chosen_shift is None)

        if usable:
            try:
                plaintext = transform.decode(payload, chosen_shift)
            except TransformError:
                logger.debug("{} decode failed; falling back to recovery", chosen.value)
                plaintext = None

            # A guessed method has to prove itself
            if plaintext is not None and source == DecodeSource.DETECTED and not is_readable(plaintext):
                plaintext = None

            if plaintext is not None:
                return DecodeResult(
                    plaintext=plaintext,
                    method=chosen,
                    shift=chosen_shift,
                    source=source,
                    explanation=transform.explain(chosen_shift),
                )

        recovered = self.recovery.search(payload)
        return DecodeResult(
            plaintext=recovered.plaintext,
            method=recovered.method,
            shift=recovered.shift,
            source=DecodeSource.RECOVERED,
            explanation=self.registry.require(recovered.method).explain(recovered.shift),
        )
