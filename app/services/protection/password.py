"""
Password layer: a repeating-key XOR over UTF-8 bytes, carried as Base64.

This is obfuscation, not encryption. Its only guarantee is that a wrong
password is reported as such instead of yielding partial garbage.
"""

import base64
import binascii
from itertools import cycle

from app.core.exceptions import IncorrectPasswordError
from app.services.preprocessing.text import is_plausible_text
from app.services.transforms.substitution import SubstitutionTransform


def _xor(data: bytes, password: str) -> bytes:
    key = password.encode("utf-8")
    return bytes(b ^ k for b, k in zip(data, cycle(key)))


def is_blank_password(password: str | None) -> bool:
    return password is None or not password.strip()


def protect(text: str, password: str | None) -> str:
    """Mask `text` with `password`. A blank password leaves text unchanged."""
    if is_blank_password(password):
        return text

    masked = _xor(text.encode("utf-8"), password)
    return base64.b64encode(masked).decode("ascii")


def unprotect(cipher: str, password: str | None) -> str:
    """
    Remove the password mask.

    A blank password leaves the text unchanged. Otherwise the unmasked text
    must look like something our transforms produce; if not, the password
    is wrong.

    Raises:
        IncorrectPasswordError: On bad Base64, non-UTF-8 output or
            implausible output. Never carries any part of the result.
    """
    if is_blank_password(password):
        return cipher

    try:
        masked = base64.b64decode("".join(cipher.split()), validate=True)
        result = _xor(masked, password).decode("utf-8")
    except (binascii.Error, ValueError):
        raise IncorrectPasswordError() from None

    if result and not is_plausible_text(result, SubstitutionTransform.NON_ASCII_GLYPHS):
        raise IncorrectPasswordError()

    return result
