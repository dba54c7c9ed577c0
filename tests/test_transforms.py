"""Tests for the reversible text transforms."""

import pytest

from app.core.exceptions import InvalidTransformInputError, TransformNotFoundError
from app.models.schemas import EncodingMethod
from app.services.transforms.base64_codec import Base64Transform
from app.services.transforms.caesar import CaesarTransform
from app.services.transforms.emoji import EmojiTransform
from app.services.transforms.registry import TransformRegistry
from app.services.transforms.substitution import SubstitutionTransform


class TestTransformRegistry:
    """Test the transform registry."""

    def test_all_transforms_registered(self):
        """Verify all four methods are registered."""
        registered = TransformRegistry.list_registered()

        for method in EncodingMethod:
            assert method in registered, f"{method} not registered"

    def test_instances_are_cached(self):
        registry = TransformRegistry()
        assert registry.get_transform(EncodingMethod.CAESAR) is registry.get_transform(
            EncodingMethod.CAESAR
        )

    def test_unknown_method(self):
        registry = TransformRegistry()
        assert registry.get_transform("rot13") is None
        with pytest.raises(TransformNotFoundError):
            registry.require("rot13")


class TestSubstitutionTransform:
    """Test suite for the symbol substitution transform."""

    @pytest.fixture
    def transform(self):
        return SubstitutionTransform()

    def test_encode_hello(self, transform):
        assert transform.encode("Hello") == "#3110"

    def test_decode_lowercases(self, transform):
        """Case is lost on the way through."""
        assert transform.decode(transform.encode("Hello")) == "hello"

    def test_multi_character_symbols(self, transform):
        assert transform.encode("m") == "|v|"
        assert transform.decode("|v|") == "m"
        assert transform.decode("\\/\\/") == "w"
        assert transform.decode("|_|_|") == "uj"

    def test_pangram_roundtrip(self, transform):
        plaintext = "The quick brown fox jumps over the lazy dog 0123456789.,?!"
        encoded = transform.encode(plaintext)
        assert transform.decode(encoded) == plaintext.lower()

    def test_digits_and_punctuation(self, transform):
        assert transform.encode("0123456789") == "øizeasgtbq"
        assert transform.encode(".,?!") == "•¸¿¡"

    def test_unmapped_characters_pass_through(self, transform):
        assert transform.encode("a-b") == "4-8"
        assert transform.decode("4-8") == "a-b"

    def test_max_symbol_length(self, transform):
        assert transform.MAX_SYMBOL_LENGTH == 4

    def test_symbol_characters(self, transform):
        """Only single-character letter and space symbols count."""
        assert transform.SYMBOL_CHARACTERS == frozenset("48(36#!1097$2~")
        assert "|" not in transform.SYMBOL_CHARACTERS
        assert "/" not in transform.SYMBOL_CHARACTERS


class TestCaesarTransform:
    """Test suite for the Caesar transform."""

    @pytest.fixture
    def transform(self):
        return CaesarTransform()

    @pytest.fixture
    def sample_plaintext(self):
        return "Hello, World!"

    def test_encode_decode_roundtrip(self, transform, sample_plaintext):
        """Test that encode followed by decode returns the original for every shift."""
        for shift in range(1, 26):
            encoded = transform.encode(sample_plaintext, shift)
            assert transform.decode(encoded, shift) == sample_plaintext

    def test_encode_shift_7(self, transform, sample_plaintext):
        assert transform.encode(sample_plaintext, 7) == "Olssv, Dvysk!"

    def test_encode_meet_me(self, transform):
        assert transform.encode("meet me", 5) == "rjjy rj"

    def test_default_shift(self, transform):
        assert transform.encode("abc") == "def"
        assert transform.decode("def") == "abc"

    def test_shift_is_reduced_mod_26(self, transform):
        assert transform.encode("abc", 29) == transform.encode("abc", 3)
        assert transform.canonical_shift(26) == 0

    def test_non_letters_untouched(self, transform):
        assert transform.encode("123 ?!", 4) == "123 ?!"
        assert transform.encode("é", 4) == "é"

    def test_explain_mentions_shift(self, transform):
        assert "shift of 5" in transform.explain(5)


class TestBase64Transform:
    """Test suite for the Base64 transform."""

    @pytest.fixture
    def transform(self):
        return Base64Transform()

    def test_encode(self, transform):
        assert transform.encode("Hello") == "SGVsbG8="
        assert transform.encode("secret") == "c2VjcmV0"

    def test_decode_ignores_whitespace(self, transform):
        assert transform.decode("SGVs\nbG8=") == "Hello"

    def test_unicode_roundtrip(self, transform):
        assert transform.decode(transform.encode("héllo wörld")) == "héllo wörld"

    def test_invalid_input(self, transform):
        with pytest.raises(InvalidTransformInputError):
            transform.decode("not base64!")

    def test_bad_padding(self, transform):
        with pytest.raises(InvalidTransformInputError):
            transform.decode("SGVsbG8")


class TestEmojiTransform:
    """Test suite for the emoji transform."""

    @pytest.fixture
    def transform(self):
        return EmojiTransform()

    def test_encode(self, transform):
        assert transform.encode("Hi!") == "\U0001f606\U0001f609\u2755"

    def test_roundtrip(self, transform):
        plaintext = "meet me at 7, ok?"
        assert transform.decode(transform.encode(plaintext)) == plaintext

    def test_variation_selector_tolerated(self, transform):
        assert transform.decode("\u2753\ufe0f") == ","

    def test_unknown_glyphs_pass_through(self, transform):
        assert transform.decode("\U0001f680a") == "\U0001f680a"

    def test_table_is_one_to_one(self, transform):
        assert len(transform.REVERSE_TABLE) == len(transform.TABLE)
