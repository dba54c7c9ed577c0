from fastapi import APIRouter

from app.models.schemas import DetectRequest, DetectResponse, ErrorResponse
from app.services.detection.method_detector import MethodDetector
from app.services.pipeline.decoder import prepare_input

router = APIRouter()


@router.post(
    "",
    response_model=DetectResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Invalid request body"},
    },
    summary="Detect encoding",
    description=(
        "Report which method a message was most likely encoded with and "
        "whether it appears to be password protected."
    ),
)
async def detect_encoding(request: DetectRequest) -> DetectResponse:
    detector = MethodDetector()
    report = detector.analyze(prepare_input(request.message))
    return DetectResponse(report=report)
