import base64
import binascii
import re
from dataclasses import dataclass
from typing import ClassVar

from app.models.schemas import DetectionReport, EncodingMethod
from app.services.envelope.metadata_envelope import unwrap
from app.services.preprocessing.text import contains_emoji, is_readable
from app.services.transforms.registry import TransformRegistry
from app.services.transforms.substitution import SubstitutionTransform


@dataclass
class DetectionThresholds:
    """Thresholds for method detection."""

    # Password heuristic: look at this many decoded bytes...
    password_sample_size: int = 20
    # ...and call it masked when more than this many are non-printable
    password_nonprintable_limit: int = 8

    # Share of characters that must be substitution symbols
    substitution_ratio: float = 1 / 3


class MethodDetector:
    """
    Rule-based encoding method detection.

    Classifies raw text into the most probable transform using structural
    heuristics only. Checks run in a fixed priority order, and the first
    that matches wins:

    1. Embedded metadata declaring a method
    2. Any emoji glyph (checked before Base64 because emoji text can
       coincidentally satisfy later checks)
    3. Base64 shape that decodes to printable ASCII
    4. A high share of substitution symbols
    5. Caesar, the catch-all, since any text is trivially a Caesar shift
    """

    THRESHOLDS: ClassVar[DetectionThresholds] = DetectionThresholds()
    BASE64_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"[A-Za-z0-9+/=]+")

    def is_likely_password_protected(self, text: str) -> bool:
        """
        Guess whether text carries a password mask.

        Masked text is Base64 whose decoded bytes look random: more than
        8 of the first 20 fall outside printable ASCII.
        """
        t = self.THRESHOLDS
        try:
            decoded = base64.b64decode("".join(text.split()), validate=True)
        except (binascii.Error, ValueError):
            return False

        sample = decoded[: t.password_sample_size]
        nonprintable = sum(1 for byte in sample if byte < 32 or byte > 126)
        return nonprintable > t.password_nonprintable_limit

    def detect_encryption_method(self, text: str) -> EncodingMethod:
        """Return the most probable encoding method for `text`."""
        return self._detect(text)[0]

    def analyze(self, text: str) -> DetectionReport:
        """
        Full detection report for a raw message.

        Args:
            text: The message, with or without an envelope descriptor

        Returns:
            DetectionReport with method, flags and reasoning
        """
        envelope = unwrap(text)
        metadata = envelope.metadata
        method, reasoning = self._detect(text)
        transform = TransformRegistry().require(method)

        if metadata is not None:
            return DetectionReport(
                method=method,
                method_name=transform.name,
                method_description=transform.description,
                shift=metadata.shift,
                password_protected=metadata.password_protected,
                self_destruct=metadata.self_destruct,
                custom_encryption=metadata.custom_encryption,
                from_metadata=True,
                reasoning=reasoning,
            )

        password_protected = self.is_likely_password_protected(text)
        if password_protected:
            reasoning.append("Decoded Base64 looks like random bytes; likely password protected")

        return DetectionReport(
            method=method,
            method_name=transform.name,
            method_description=transform.description,
            password_protected=password_protected,
            from_metadata=False,
            reasoning=reasoning,
        )

    def _detect(self, text: str) -> tuple[EncodingMethod, list[str]]:
        metadata = unwrap(text).metadata
        if metadata is not None:
            return metadata.method, [f"Envelope metadata declares '{metadata.method.value}'"]

        if contains_emoji(text):
            return EncodingMethod.EMOJI, ["Text contains emoji glyphs"]

        if self._looks_like_base64(text):
            return EncodingMethod.BASE64, [
                "Text uses only the Base64 alphabet and decodes to printable ASCII",
            ]

        symbol_count = sum(1 for char in text if char in SubstitutionTransform.SYMBOL_CHARACTERS)
        if text and symbol_count > len(text) * self.THRESHOLDS.substitution_ratio:
            return EncodingMethod.SUBSTITUTION, [
                f"{symbol_count} of {len(text)} characters are substitution symbols",
            ]

        return EncodingMethod.CAESAR, ["No distinctive structure; assuming Caesar shift"]

    def _looks_like_base64(self, text: str) -> bool:
        if not self.BASE64_PATTERN.fullmatch(text) or len(text) % 4 != 0:
            return False
        try:
            decoded = base64.b64decode(text, validate=True).decode("ascii")
        except (binascii.Error, ValueError):
            return False
        return is_readable(decoded)
