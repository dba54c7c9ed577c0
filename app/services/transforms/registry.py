from typing import Type

from app.core.exceptions import TransformNotFoundError
from app.models.schemas import EncodingMethod
from app.services.transforms.base import TextTransform


class TransformRegistry:
    """
    Registry for text transforms.

    Manages available transforms and provides lookup by encoding method.
    """

    _transforms: dict[EncodingMethod, Type[TextTransform]] = {}
    _instances: dict[EncodingMethod, TextTransform] = {}

    @classmethod
    def register(cls, transform_class: Type[TextTransform]) -> Type[TextTransform]:
        """
        Register a transform class.

        Can be used as a decorator:
            @TransformRegistry.register
            class CaesarTransform(TextTransform):
                ...

        Args:
            transform_class: The transform class to register

        Returns:
            The transform class (for decorator usage)
        """
        cls._transforms[transform_class.method] = transform_class
        return transform_class

    def get_transform(self, method: EncodingMethod) -> TextTransform | None:
        """
        Get a transform instance for the specified method.

        Args:
            method: The encoding method

        Returns:
            Transform instance or None if not found
        """
        if method not in self._transforms:
            return None

        # Lazy instantiation with caching
        if method not in self._instances:
            self._instances[method] = self._transforms[method]()

        return self._instances[method]

    def require(self, method: EncodingMethod) -> TextTransform:
        """Like get_transform() but raises TransformNotFoundError."""
        transform = self.get_transform(method)
        if transform is None:
            raise TransformNotFoundError(str(method))
        return transform

    @classmethod
    def list_registered(cls) -> list[EncodingMethod]:
        """List all registered encoding methods."""
        return list(cls._transforms.keys())


# Import transforms to trigger registration
def _load_transforms() -> None:
    """Load all transform modules to trigger registration."""
    from app.services.transforms import (  # noqa: F401
        base64_codec,
        caesar,
        emoji,
        substitution,
    )


# Load transforms when module is imported
_load_transforms()
