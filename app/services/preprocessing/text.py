import re
import unicodedata
from collections.abc import Iterable, Iterator

# Pictographic blocks used by emoji presentation glyphs. Keycap bases
# (digits, '#', '*') are deliberately absent: they are ordinary text.
EMOJI_RANGES = (
    "\u2300-\u23ff"  # Miscellaneous Technical
    "\u2600-\u27bf"  # Miscellaneous Symbols, Dingbats
    "\u2b00-\u2bff"  # Miscellaneous Symbols and Arrows
    "\U0001f000-\U0001faff"  # Mahjong through Symbols and Pictographs Extended-A
)

# Marks that attach to the preceding glyph within one grapheme
_EXTENDERS = "\u0300-\u036f\u20d0-\u20ff\ufe00-\ufe0f\U0001f3fb-\U0001f3ff\U000e0020-\U000e007f"

_EMOJI_PATTERN = re.compile(f"[{EMOJI_RANGES}]")
_GRAPHEME_PATTERN = re.compile(
    r"\r\n"
    r"|[\U0001f1e6-\U0001f1ff]{2}"
    f"|.[{_EXTENDERS}]*(?:\u200d.[{_EXTENDERS}]*)*",
    re.DOTALL,
)
_READABLE_PATTERN = re.compile(r"[\x20-\x7e\s]+")


def contains_emoji(text: str) -> bool:
    """True if any character of `text` falls in an emoji presentation block."""
    return _EMOJI_PATTERN.search(text) is not None


def is_readable(text: str) -> bool:
    """True for non-empty text made only of printable ASCII and whitespace."""
    return _READABLE_PATTERN.fullmatch(text) is not None


def is_plausible_text(text: str, extra_glyphs: Iterable[str] = ()) -> bool:
    """
    Looser readability check used after removing a password layer.

    Accepts printable ASCII, whitespace, emoji presentation glyphs (with
    their joiners and modifiers) and any caller-supplied glyphs.
    """
    extra = "".join(re.escape(glyph) for glyph in sorted(set(extra_glyphs)))
    pattern = f"[\\x20-\\x7e\\s{EMOJI_RANGES}{_EXTENDERS}\u200d{extra}]+"
    return re.fullmatch(pattern, text) is not None


def iter_graphemes(text: str) -> Iterator[str]:
    """
    Split text into user-perceived characters.

    A grapheme here is a base character followed by combining marks,
    variation selectors, skin-tone modifiers and zero-width-joined
    continuations; regional indicator pairs (flags) stay together.
    """
    for match in _GRAPHEME_PATTERN.finditer(text):
        yield match.group(0)


def strip_variation_selectors(grapheme: str) -> str:
    """Drop VS15/VS16 so text- and emoji-style glyphs compare equal."""
    return grapheme.replace("\ufe0f", "").replace("\ufe0e", "")


def utf16_code_units(text: str) -> list[int]:
    """Return the UTF-16 code units of `text`, as a browser string exposes them."""
    encoded = text.encode("utf-16-le")
    return [int.from_bytes(encoded[i:i + 2], "little") for i in range(0, len(encoded), 2)]


def normalize_input(text: str) -> str:
    """NFC-normalize pasted input and trim surrounding whitespace."""
    return unicodedata.normalize("NFC", text).strip()
