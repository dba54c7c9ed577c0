from io import BytesIO

import qrcode
import qrcode.image.svg
from qrcode.exceptions import DataOverflowError

from app.core.exceptions import ValidationError
from app.services.sharing.links import build_qr_payload


def render_qr_svg(envelope: str) -> bytes:
    """
    Render the QR payload for `envelope` as an SVG document.

    High error correction so codes survive being photographed off a screen.

    Raises:
        ValidationError: If the payload does not fit in a QR code
    """
    qr = qrcode.QRCode(
        version=None,  # Auto-detect version
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=10,
        border=2,
        image_factory=qrcode.image.svg.SvgPathImage,
    )
    qr.add_data(build_qr_payload(envelope))

    try:
        qr.make(fit=True)
    except DataOverflowError as e:
        raise ValidationError(
            "Message is too long for a QR code",
            {"length": len(envelope)},
        ) from e

    stream = BytesIO()
    qr.make_image().save(stream)
    return stream.getvalue()
