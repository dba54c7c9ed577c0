from typing import Any


class MessageServiceError(Exception):
    """Base exception for all message encoding/decoding errors."""

    code: str = "message_error"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_detail(self) -> dict[str, Any]:
        """Error body for API responses."""
        return {"error": self.code, "message": self.message, "details": self.details}


class ValidationError(MessageServiceError):
    """Raised when input validation fails."""

    code = "invalid_input"


class EmptyMessageError(ValidationError):
    """Raised when there is no text to encode or decode."""

    code = "empty_message"

    def __init__(self) -> None:
        super().__init__("Please enter some text")


class MessageTooLongError(ValidationError):
    """Raised when a message exceeds the configured maximum length."""

    code = "message_too_long"

    def __init__(self, length: int, max_length: int):
        super().__init__(
            f"Message length {length} exceeds maximum {max_length}",
            {"length": length, "max_length": max_length},
        )


class InvalidShiftError(ValidationError):
    """Raised when a Caesar shift is a no-op (a multiple of 26)."""

    code = "invalid_shift"

    def __init__(self, shift: int):
        super().__init__(
            f"Caesar shift {shift} leaves the text unchanged",
            {"shift": shift},
        )


class SeparatorCollisionError(ValidationError):
    """Raised when an encoded payload would collide with the envelope separator."""

    code = "separator_collision"

    def __init__(self, method: str):
        super().__init__(
            "This message cannot be shared with the selected method. "
            "Try a different method or add a password.",
            {"method": method},
        )


class InputRequiredError(MessageServiceError):
    """Raised when decoding needs a secret the caller has not supplied."""

    code = "input_required"


class PasswordRequiredError(InputRequiredError):
    """The message is password protected and no password was given."""

    code = "password_required"

    def __init__(self) -> None:
        super().__init__(
            "This message is password protected. Please enter the password to decrypt."
        )


class CustomKeyRequiredError(InputRequiredError):
    """The message was encoded with a custom key and none was given."""

    code = "custom_key_required"

    def __init__(self) -> None:
        super().__init__(
            "This message was encrypted with a custom key. Please enter it to decrypt."
        )


class WrongSecretError(MessageServiceError):
    """Raised when a supplied secret produces unreadable output."""

    code = "wrong_secret"


class IncorrectPasswordError(WrongSecretError):
    """The password does not match. Carries no part of the attempted output."""

    code = "incorrect_password"

    def __init__(self) -> None:
        super().__init__("Invalid password or encoded text")


class UndecodableMessageError(MessageServiceError):
    """Raised when no method produces readable text."""

    code = "undecodable"

    def __init__(self) -> None:
        super().__init__(
            "Could not decrypt the message. Try a different method or check the input."
        )


class AlreadyDestructedError(MessageServiceError):
    """Raised when a self-destructing message has already been viewed."""

    code = "self_destructed"

    def __init__(self, message_id: str):
        super().__init__(
            "This message has already been viewed and is no longer available.",
            {"message_id": message_id},
        )


class TransformError(MessageServiceError):
    """Base exception for text transform errors."""

    code = "transform_error"


class TransformNotFoundError(TransformError):
    """Raised when requested transform is not registered."""

    code = "transform_not_found"

    def __init__(self, method: str):
        super().__init__(
            f"Encoding method '{method}' not found",
            {"method": method},
        )


class InvalidTransformInputError(TransformError):
    """Raised when text cannot be decoded by the requested transform."""

    code = "invalid_transform_input"


class MalformedMetadataError(MessageServiceError):
    """Raised internally when an envelope descriptor cannot be parsed."""

    code = "malformed_metadata"
