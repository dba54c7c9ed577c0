import string
from typing import ClassVar

from app.models.schemas import EncodingMethod
from app.services.transforms.base import TextTransform
from app.services.transforms.registry import TransformRegistry


@TransformRegistry.register
class CaesarTransform(TextTransform):
    """
    Caesar shift transform.

    Shifts each ASCII letter by a fixed amount within its own case,
    leaving everything else untouched. The same transform is reused by the
    custom-key layer, which derives its shift from the key text.
    """

    name = "Caesar Cipher"
    method = EncodingMethod.CAESAR
    description = (
        "A substitution cipher where each letter is shifted by a fixed amount. "
        "Named after Julius Caesar who used it for military communications."
    )

    UPPERCASE: ClassVar[str] = string.ascii_uppercase
    LOWERCASE: ClassVar[str] = string.ascii_lowercase
    DEFAULT_SHIFT: ClassVar[int] = 3

    def encode(self, text: str, shift: int | None = None) -> str:
        """Encode with the given shift (defaults to 3)."""
        return self._shift(text, self.canonical_shift(shift))

    def decode(self, text: str, shift: int | None = None) -> str:
        """Decode by shifting forward the complementary amount."""
        return self._shift(text, (26 - self.canonical_shift(shift)) % 26)

    def explain(self, shift: int | None = None) -> str:
        shift = self.canonical_shift(shift)
        return (
            f"Caesar cipher with shift of {shift}. "
            f"Each letter was shifted back {shift} positions in the alphabet."
        )

    @property
    def requires_shift(self) -> bool:
        return True

    def canonical_shift(self, shift: int | None) -> int:
        """Reduce a shift into [0, 25]."""
        if shift is None:
            shift = self.DEFAULT_SHIFT
        return int(shift) % 26

    def _shift(self, text: str, shift: int) -> str:
        result = []

        for char in text:
            if char in self.UPPERCASE:
                idx = self.UPPERCASE.index(char)
                result.append(self.UPPERCASE[(idx + shift) % 26])
            elif char in self.LOWERCASE:
                idx = self.LOWERCASE.index(char)
                result.append(self.LOWERCASE[(idx + shift) % 26])
            else:
                result.append(char)

        return "".join(result)
