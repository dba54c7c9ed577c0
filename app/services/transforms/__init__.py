"""Reversible text transforms."""

from app.services.transforms.registry import TransformRegistry
from app.services.transforms.base64_codec import Base64Transform
from app.services.transforms.caesar import CaesarTransform
from app.services.transforms.emoji import EmojiTransform
from app.services.transforms.substitution import SubstitutionTransform

__all__ = [
    "TransformRegistry",
    "Base64Transform",
    "CaesarTransform",
    "EmojiTransform",
    "SubstitutionTransform",
]
