"""Tests for the password and custom-key layers."""

import pytest

from app.core.exceptions import IncorrectPasswordError
from app.services.protection.custom_key import (
    apply_custom_key,
    derive_custom_shift,
    has_custom_key,
    remove_custom_key,
)
from app.services.protection.password import is_blank_password, protect, unprotect


class TestPasswordLayer:
    """Test suite for the XOR password mask."""

    def test_roundtrip(self):
        masked = protect("c2VjcmV0", "pw123")
        assert masked != "c2VjcmV0"
        assert unprotect(masked, "pw123") == "c2VjcmV0"

    def test_blank_password_is_identity(self):
        assert protect("hello", "") == "hello"
        assert protect("hello", "   ") == "hello"
        assert unprotect("hello", None) == "hello"
        assert is_blank_password("  ")
        assert not is_blank_password("x")

    def test_wrong_password(self):
        masked = protect("c2VjcmV0", "pw123")
        with pytest.raises(IncorrectPasswordError) as exc_info:
            unprotect(masked, "wrong")
        assert "c2Vj" not in str(exc_info.value)

    def test_not_base64(self):
        with pytest.raises(IncorrectPasswordError):
            unprotect("definitely not masked!", "pw123")

    def test_substitution_glyphs_survive(self):
        masked = protect("|°ø•", "key")
        assert unprotect(masked, "key") == "|°ø•"

    def test_emoji_survive(self):
        masked = protect("\U0001f606\U0001f609", "key")
        assert unprotect(masked, "key") == "\U0001f606\U0001f609"


class TestCustomKeyLayer:
    """Test suite for the custom-key Caesar layer."""

    def test_derive_shift(self):
        assert derive_custom_shift("key") == 17
        assert derive_custom_shift("abc") == 8

    def test_derive_shift_counts_utf16_units(self):
        # U+1F600 is the surrogate pair D83D DE00
        assert derive_custom_shift("\U0001f600") == (0xD83D + 0xDE00) % 26

    def test_has_custom_key(self):
        assert has_custom_key("k")
        assert not has_custom_key("")
        assert not has_custom_key(None)

    def test_roundtrip(self):
        shifted = apply_custom_key("Khoor, Zruog!", "key")
        assert shifted != "Khoor, Zruog!"
        assert remove_custom_key(shifted, "key") == "Khoor, Zruog!"

    def test_shift_of_zero_is_identity(self):
        # "z" is 122, 122 % 26 == 18; "\x08" pads the sum to 130 == 5 * 26
        assert derive_custom_shift("z\x08") == 0
        assert apply_custom_key("hello", "z\x08") == "hello"
