import base64
import binascii

from app.core.exceptions import InvalidTransformInputError
from app.models.schemas import EncodingMethod
from app.services.transforms.base import TextTransform
from app.services.transforms.registry import TransformRegistry


@TransformRegistry.register
class Base64Transform(TextTransform):
    """Standard Base64 over the UTF-8 bytes of the text."""

    name = "Base64"
    method = EncodingMethod.BASE64
    description = "Standard binary-to-text encoding using A-Z, a-z, 0-9, '+' and '/'."

    def encode(self, text: str, shift: int | None = None) -> str:
        return base64.b64encode(text.encode("utf-8")).decode("ascii")

    def decode(self, text: str, shift: int | None = None) -> str:
        """
        Decode Base64 text.

        Whitespace is ignored; anything else outside the Base64 alphabet,
        bad padding or bytes that are not UTF-8 raise
        InvalidTransformInputError.
        """
        compact = "".join(text.split())
        try:
            raw = base64.b64decode(compact, validate=True)
            return raw.decode("utf-8")
        except (binascii.Error, ValueError) as e:
            raise InvalidTransformInputError("Invalid Base64 code") from e

    def explain(self, shift: int | None = None) -> str:
        return "Base64 encoding: every 4 characters carry 3 bytes of the original UTF-8 text."
