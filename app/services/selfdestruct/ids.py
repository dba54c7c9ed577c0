import secrets
import string
import time

_BASE36 = string.digits + string.ascii_lowercase


def generate_message_id() -> str:
    """Unique id of the form `msg_<epoch millis>_<8 random base36 chars>`."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(8))
    return f"msg_{int(time.time() * 1000)}_{suffix}"
