from app.models.schemas import EncodingMethod
from app.services.preprocessing.text import utf16_code_units
from app.services.transforms.registry import TransformRegistry


def derive_custom_shift(key: str) -> int:
    """Shift derived from a custom key: sum of its UTF-16 code units mod 26."""
    return sum(utf16_code_units(key)) % 26


def has_custom_key(key: str | None) -> bool:
    return bool(key)


def apply_custom_key(text: str, key: str) -> str:
    """Layer an extra Caesar shift derived from `key` on top of encoded text."""
    caesar = TransformRegistry().require(EncodingMethod.CAESAR)
    return caesar.encode(text, derive_custom_shift(key))


def remove_custom_key(text: str, key: str) -> str:
    """Reverse apply_custom_key()."""
    caesar = TransformRegistry().require(EncodingMethod.CAESAR)
    return caesar.decode(text, derive_custom_shift(key))
