from abc import ABC, abstractmethod

from app.models.schemas import EncodingMethod


class TextTransform(ABC):
    """
    Abstract base class for all reversible text transforms.

    Each transform must provide:
    - encode(): Obscure plaintext
    - decode(): Reverse encode() on its valid input domain
    - explain(): Generate human-readable explanation

    Transforms are stateless; `shift` is only meaningful for transforms
    that take a key and is ignored by the others.
    """

    # Transform metadata
    name: str
    method: EncodingMethod
    description: str

    @abstractmethod
    def encode(self, text: str, shift: int | None = None) -> str:
        """
        Encode plaintext.

        Args:
            text: The plaintext to encode
            shift: Optional key for keyed transforms

        Returns:
            Encoded text
        """
        pass

    @abstractmethod
    def decode(self, text: str, shift: int | None = None) -> str:
        """
        Decode text produced by encode().

        Args:
            text: The encoded text
            shift: The key used at encode time, for keyed transforms

        Returns:
            Decoded text

        Raises:
            InvalidTransformInputError: If the text is not valid for this transform
        """
        pass

    @abstractmethod
    def explain(self, shift: int | None = None) -> str:
        """
        Generate a human-readable explanation of the transform.

        Args:
            shift: The key used, for keyed transforms

        Returns:
            Explanation string
        """
        pass

    @property
    def requires_shift(self) -> bool:
        """Whether decode() needs a shift to be meaningful."""
        return False
