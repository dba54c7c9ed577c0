"""Tests for encoding method detection."""

import pytest

from app.models.schemas import EncodingMethod
from app.services.detection.method_detector import MethodDetector
from app.services.pipeline.encoder import EncodePipeline
from app.services.protection.password import protect
from app.services.selfdestruct.ledger import InMemoryLedger
from app.services.transforms.emoji import EmojiTransform
from app.services.transforms.substitution import SubstitutionTransform


class TestMethodDetector:
    """Test suite for rule-based method detection."""

    @pytest.fixture
    def detector(self):
        return MethodDetector()

    @pytest.fixture
    def encoder(self):
        return EncodePipeline(InMemoryLedger())

    def test_metadata_wins(self, detector, encoder):
        result = encoder.encode("meet me", EncodingMethod.CAESAR, shift=5)
        report = detector.analyze(result.envelope)

        assert report.method == EncodingMethod.CAESAR
        assert report.shift == 5
        assert report.from_metadata

    def test_emoji(self, detector):
        text = EmojiTransform().encode("hello there")
        assert detector.detect_encryption_method(text) == EncodingMethod.EMOJI

    def test_emoji_before_base64(self, detector):
        """A single emoji is enough, even among Base64-looking characters."""
        assert detector.detect_encryption_method("SGVsbG8=\u2b55") == EncodingMethod.EMOJI

    def test_base64(self, detector):
        assert detector.detect_encryption_method("SGVsbG8gd29ybGQ=") == EncodingMethod.BASE64

    def test_base64_shape_but_binary_content(self, detector):
        # Decodes to bytes outside printable ASCII
        assert detector.detect_encryption_method("////") != EncodingMethod.BASE64

    def test_substitution(self, detector):
        text = SubstitutionTransform().encode("hello world")
        assert detector.detect_encryption_method(text) == EncodingMethod.SUBSTITUTION

    def test_multi_character_symbols_do_not_count(self, detector):
        assert detector.detect_encryption_method("|<>|") == EncodingMethod.CAESAR

    def test_caesar_is_the_fallback(self, detector):
        assert detector.detect_encryption_method("Khoor zruog") == EncodingMethod.CAESAR

    def test_password_heuristic(self, detector):
        masked = protect("attackatdawnxyzabcdefgh", "secret")
        assert detector.is_likely_password_protected(masked)

        report = detector.analyze(masked)
        assert report.password_protected
        assert not report.from_metadata

    def test_plain_base64_is_not_password_protected(self, detector):
        assert not detector.is_likely_password_protected("SGVsbG8gd29ybGQ=")

    def test_non_base64_is_not_password_protected(self, detector):
        assert not detector.is_likely_password_protected("Khoor zruog!")

    def test_report_reasoning(self, detector):
        report = detector.analyze("Khoor zruog")
        assert report.reasoning
        assert report.method == EncodingMethod.CAESAR

    def test_report_names_method(self, detector):
        report = detector.analyze("SGVsbG8gd29ybGQ=")
        assert report.method_name == "Base64"
        assert report.method_description
