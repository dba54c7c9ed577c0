from typing import ClassVar

from app.models.schemas import EncodingMethod
from app.services.transforms.base import TextTransform
from app.services.transforms.registry import TransformRegistry


@TransformRegistry.register
class SubstitutionTransform(TextTransform):
    """
    Leetspeak-style symbol substitution.

    Every supported character maps to a fixed symbol of one to four
    characters. Case is not preserved: input is lowercased before encoding.
    Because symbols vary in length, decoding tokenises greedily, always
    preferring the longest symbol that matches at the current position.
    """

    name = "Symbol Substitution"
    method = EncodingMethod.SUBSTITUTION
    description = (
        "Replaces letters, digits and common punctuation with look-alike "
        "symbols, e.g. 'e' becomes '3' and 'm' becomes '|v|'."
    )

    TABLE: ClassVar[dict[str, str]] = {
        "a": "4", "b": "8", "c": "(", "d": "|)", "e": "3", "f": "|=",
        "g": "6", "h": "#", "i": "!", "j": "_|", "k": "|<", "l": "1",
        "m": "|v|", "n": "|\\|", "o": "0", "p": "|°", "q": "9", "r": "|2",
        "s": "$", "t": "7", "u": "|_|", "v": "\\/", "w": "\\/\\/", "x": "><",
        "y": "`/", "z": "2", " ": "~",
        "0": "ø", "1": "i", "2": "z", "3": "e", "4": "a",
        "5": "s", "6": "g", "7": "t", "8": "b", "9": "q",
        ".": "•", ",": "¸", "?": "¿", "!": "¡",
    }
    REVERSE_TABLE: ClassVar[dict[str, str]] = {symbol: char for char, symbol in TABLE.items()}
    MAX_SYMBOL_LENGTH: ClassVar[int] = max(len(symbol) for symbol in TABLE.values())

    # Single-character, non-letter symbols for letters and space
    SYMBOL_CHARACTERS: ClassVar[frozenset[str]] = frozenset(
        symbol
        for plain, symbol in TABLE.items()
        if (plain.isalpha() or plain == " ") and len(symbol) == 1 and not symbol.isalpha()
    )
    NON_ASCII_GLYPHS: ClassVar[frozenset[str]] = frozenset(
        char for symbol in TABLE.values() for char in symbol if ord(char) > 0x7E
    )

    def encode(self, text: str, shift: int | None = None) -> str:
        """Lowercase and substitute character by character."""
        return "".join(self.TABLE.get(char, char) for char in text.lower())

    def decode(self, text: str, shift: int | None = None) -> str:
        """Greedy longest-match tokenisation; unknown characters pass through."""
        result = []
        i = 0

        while i < len(text):
            for length in range(min(self.MAX_SYMBOL_LENGTH, len(text) - i), 0, -1):
                chunk = text[i:i + length]
                if chunk in self.REVERSE_TABLE:
                    result.append(self.REVERSE_TABLE[chunk])
                    i += length
                    break
            else:
                result.append(text[i])
                i += 1

        return "".join(result)

    def explain(self, shift: int | None = None) -> str:
        return (
            "Symbol substitution: each symbol stands for one character "
            "(for example '#' is 'h' and '|v|' is 'm'). Case is not preserved."
        )
