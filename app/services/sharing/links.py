from urllib.parse import parse_qs, quote, urlsplit

QR_PREFIX = "secretmsg://"
SHARE_PARAM = "decrypt"

# Characters encodeURIComponent leaves alone besides alphanumerics and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


def build_share_url(envelope: str, base_url: str) -> str:
    """Base URL (query string dropped) with `?decrypt=<url-encoded envelope>`."""
    base = base_url.split("?", 1)[0]
    return f"{base}?{SHARE_PARAM}={quote(envelope, safe=_URI_COMPONENT_SAFE)}"


def build_qr_payload(envelope: str) -> str:
    """The string a QR code for `envelope` carries."""
    return QR_PREFIX + envelope


def is_qr_payload(text: str) -> bool:
    return text.startswith(QR_PREFIX)


def extract_envelope(raw: str) -> str:
    """
    Recover the envelope from whatever the user pasted.

    Handles scanned QR payloads and share URLs; anything else is returned
    unchanged.
    """
    if is_qr_payload(raw):
        return raw[len(QR_PREFIX):]

    if raw.startswith(("http://", "https://")):
        values = parse_qs(urlsplit(raw).query, keep_blank_values=False).get(SHARE_PARAM)
        if values:
            return values[0]

    return raw
