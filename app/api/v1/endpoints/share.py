from fastapi import APIRouter, HTTPException, Response, status

from app.core.exceptions import ValidationError
from app.models.schemas import ErrorResponse, QRCodeRequest
from app.services.sharing.qr import render_qr_svg

router = APIRouter()


@router.post(
    "/qr",
    response_class=Response,
    responses={
        200: {"content": {"image/svg+xml": {}}, "description": "QR code as SVG"},
        400: {"model": ErrorResponse, "description": "Envelope does not fit in a QR code"},
    },
    summary="Render a QR code",
    description="Render an envelope as a scannable QR code (SVG).",
)
async def render_qr_code(request: QRCodeRequest) -> Response:
    try:
        svg = render_qr_svg(request.envelope)
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_detail())

    return Response(content=svg, media_type="image/svg+xml")
