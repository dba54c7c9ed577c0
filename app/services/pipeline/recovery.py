"""
Brute-force recovery over the method space.

Used when a message carries no usable method or its declared method fails.
Candidates are tried in a fixed order and the first readable one wins:
Emoji, Base64, Substitution, then Caesar with every shift from 1 to 25.
First-match acceptance is a heuristic; short inputs can produce false
positives.
"""

from dataclasses import dataclass
from typing import ClassVar

from loguru import logger

from app.core.exceptions import TransformError, UndecodableMessageError
from app.models.schemas import EncodingMethod
from app.services.preprocessing.text import contains_emoji, is_readable
from app.services.transforms.registry import TransformRegistry


@dataclass(frozen=True)
class RecoveryCandidate:
    """One (method, shift) pair to try."""

    method: EncodingMethod
    shift: int | None = None


@dataclass
class RecoveryResult:
    """The accepted candidate and what it produced."""

    plaintext: str
    method: EncodingMethod
    shift: int | None
    attempts: int


class RecoverySearch:
    """First-match search across all transforms and Caesar shifts."""

    CANDIDATES: ClassVar[tuple[RecoveryCandidate, ...]] = (
        RecoveryCandidate(EncodingMethod.EMOJI),
        RecoveryCandidate(EncodingMethod.BASE64),
        RecoveryCandidate(EncodingMethod.SUBSTITUTION),
        *(RecoveryCandidate(EncodingMethod.CAESAR, shift) for shift in range(1, 26)),
    )

    def __init__(self):
        self.registry = TransformRegistry()

    def try_candidate(self, text: str, candidate: RecoveryCandidate) -> str | None:
        """
        Decode `text` with one candidate.

        Returns:
            The decoded text if it is readable, or if the input itself
            contains emoji (treated as self-validating); otherwise None
        """
        transform = self.registry.require(candidate.method)
        try:
            result = transform.decode(text, candidate.shift)
        except TransformError:
            return None

        if is_readable(result) or contains_emoji(text):
            return result
        return None

    def search(self, text: str) -> RecoveryResult:
        """
        Try every candidate in order and return the first acceptable one.

        Raises:
            UndecodableMessageError: If no candidate yields readable text
        """
        for attempts, candidate in enumerate(self.CANDIDATES, start=1):
            plaintext = self.try_candidate(text, candidate)
            if plaintext is not None:
                logger.debug(
                    "Recovered message with {} (shift={}) after {} attempts",
                    candidate.method.value,
                    candidate.shift,
                    attempts,
                )
                return RecoveryResult(
                    plaintext=plaintext,
                    method=candidate.method,
                    shift=candidate.shift,
                    attempts=attempts,
                )

        logger.debug("Recovery exhausted {} candidates", len(self.CANDIDATES))
        raise UndecodableMessageError()
