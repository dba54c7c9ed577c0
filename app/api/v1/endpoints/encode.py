from fastapi import APIRouter, HTTPException, status

from app.core.exceptions import MessageTooLongError, TransformError, ValidationError
from app.dependencies import RepositoryDep, SettingsDep
from app.models.schemas import EncodeRequest, EncodeResponse, ErrorResponse
from app.services.pipeline.encoder import EncodePipeline
from app.services.selfdestruct.ledger import InMemoryLedger
from app.services.sharing.links import build_qr_payload, build_share_url

router = APIRouter()


@router.post(
    "",
    response_model=EncodeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        404: {"model": ErrorResponse, "description": "Encoding method not supported"},
    },
    summary="Encode a message",
    description=(
        "Encode a message with one of the base transforms, optionally adding "
        "a custom-key shift, a password and self-destruct. Returns the "
        "shareable envelope together with a share URL and QR payload."
    ),
)
async def encode_message(
    request: EncodeRequest,
    settings: SettingsDep,
    repository: RepositoryDep,
) -> EncodeResponse:
    """
    Encode a message into a shareable envelope.

    Self-destructing messages are registered in the ledger before the
    envelope is returned.
    """
    if len(request.text) > settings.max_message_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=MessageTooLongError(len(request.text), settings.max_message_length).to_detail(),
        )

    ledger = InMemoryLedger()
    pipeline = EncodePipeline(ledger)

    try:
        result = pipeline.encode(
            request.text,
            request.method,
            shift=request.shift,
            custom_key=request.custom_key,
            password=request.password,
            self_destruct=request.self_destruct,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_detail())
    except TransformError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.to_detail())

    if result.message_id is not None:
        await repository.save(ledger)

    metadata = result.metadata
    return EncodeResponse(
        envelope=result.envelope,
        share_url=build_share_url(result.envelope, settings.public_base_url),
        qr_payload=build_qr_payload(result.envelope),
        method=metadata.method,
        shift=metadata.shift,
        password_protected=metadata.password_protected,
        custom_encryption=metadata.custom_encryption,
        self_destruct=metadata.self_destruct,
        message_id=metadata.message_id,
    )
