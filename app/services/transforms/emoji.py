from typing import ClassVar

from app.models.schemas import EncodingMethod
from app.services.preprocessing.text import iter_graphemes, strip_variation_selectors
from app.services.transforms.base import TextTransform
from app.services.transforms.registry import TransformRegistry


@TransformRegistry.register
class EmojiTransform(TextTransform):
    """
    Emoji substitution.

    Maps lowercase letters, digits, space and common punctuation to single
    emoji glyphs. Decoding walks the text grapheme by grapheme so that a
    glyph followed by a variation selector is still recognised.
    """

    name = "Emoji Substitution"
    method = EncodingMethod.EMOJI
    description = "Replaces each letter, digit and punctuation mark with an emoji."

    TABLE: ClassVar[dict[str, str]] = {
        "a": "\U0001f600", "b": "\U0001f601", "c": "\U0001f602", "d": "\U0001f923",
        "e": "\U0001f603", "f": "\U0001f604", "g": "\U0001f605", "h": "\U0001f606",
        "i": "\U0001f609", "j": "\U0001f60a", "k": "\U0001f60b", "l": "\U0001f60e",
        "m": "\U0001f60d", "n": "\U0001f618", "o": "\U0001f970", "p": "\U0001f617",
        "q": "\U0001f619", "r": "\U0001f61a", "s": "\U0001f642", "t": "\U0001f917",
        "u": "\U0001f929", "v": "\U0001f914", "w": "\U0001f928", "x": "\U0001f610",
        "y": "\U0001f611", "z": "\U0001f636",
        "0": "\U0001f44c", "1": "\U0001f44d", "2": "\U0001f44e", "3": "\U0001f44a",
        "4": "\u270a", "5": "\U0001f91b", "6": "\U0001f91c", "7": "\U0001f44f",
        "8": "\U0001f64c", "9": "\U0001f450",
        " ": "\u2796", ".": "\u2b55", ",": "\u2753", "?": "\u2754", "!": "\u2755",
    }
    REVERSE_TABLE: ClassVar[dict[str, str]] = {glyph: char for char, glyph in TABLE.items()}

    def encode(self, text: str, shift: int | None = None) -> str:
        return "".join(self.TABLE.get(char, char) for char in text.lower())

    def decode(self, text: str, shift: int | None = None) -> str:
        result = []

        for grapheme in iter_graphemes(text):
            plain = self.REVERSE_TABLE.get(grapheme)
            if plain is None:
                plain = self.REVERSE_TABLE.get(strip_variation_selectors(grapheme), grapheme)
            result.append(plain)

        return "".join(result)

    def explain(self, shift: int | None = None) -> str:
        return "Emoji substitution: each emoji stands for one letter, digit or punctuation mark."
