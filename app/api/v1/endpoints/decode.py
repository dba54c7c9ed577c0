from fastapi import APIRouter, HTTPException, status
from loguru import logger

from app.core.exceptions import (
    AlreadyDestructedError,
    InputRequiredError,
    MessageTooLongError,
    TransformError,
    UndecodableMessageError,
    ValidationError,
    WrongSecretError,
)
from app.dependencies import RepositoryDep, SettingsDep
from app.models.schemas import DecodeRequest, DecodeResponse, ErrorResponse
from app.services.pipeline.decoder import DecodePipeline, self_destruct_id
from app.services.selfdestruct.ledger import InMemoryLedger

router = APIRouter()


@router.post(
    "",
    response_model=DecodeResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid input"},
        401: {"model": ErrorResponse, "description": "Incorrect password"},
        410: {"model": ErrorResponse, "description": "Self-destructing message already viewed"},
        422: {"model": ErrorResponse, "description": "Message could not be decoded"},
        428: {"model": ErrorResponse, "description": "Password or custom key required"},
    },
    summary="Decode a message",
    description=(
        "Decode an envelope, bare payload, share URL or scanned QR payload. "
        "Messages without metadata are decoded with the selected method, the "
        "detected method, or by trying every method in turn."
    ),
)
async def decode_message(
    request: DecodeRequest,
    settings: SettingsDep,
    repository: RepositoryDep,
) -> DecodeResponse:
    """
    Decode a message.

    Self-destructing messages are marked viewed on success. Once viewed,
    a message is refused (410) to callers without a `session_id` and to the
    session that already displayed it. Viewed state is tracked per client
    session, so a session that has not displayed it yet may still reveal it.
    """
    if len(request.message) > settings.max_envelope_length:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=MessageTooLongError(len(request.message), settings.max_envelope_length).to_detail(),
        )

    message_id = self_destruct_id(request.message)
    if message_id is not None:
        ledger = await repository.load_ledger(message_id)
    else:
        ledger = InMemoryLedger()

    session = None
    if request.session_id is not None:
        session = await repository.load_session(request.session_id, message_id)

    pipeline = DecodePipeline(ledger, countdown_seconds=settings.self_destruct_seconds)

    try:
        result = pipeline.decode(
            request.message,
            password=request.password,
            custom_key=request.custom_key,
            method=request.method,
            shift=request.shift or None,
            session=session,
        )
    except InputRequiredError as e:
        raise HTTPException(status_code=status.HTTP_428_PRECONDITION_REQUIRED, detail=e.to_detail())
    except WrongSecretError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.to_detail())
    except AlreadyDestructedError as e:
        raise HTTPException(status_code=status.HTTP_410_GONE, detail=e.to_detail())
    except UndecodableMessageError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=e.to_detail())
    except (ValidationError, TransformError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.to_detail())

    if result.self_destruct:
        await repository.save(ledger, session)
        logger.info("Revealed self-destructing message {}", result.message_id)

    return DecodeResponse(
        plaintext=result.plaintext,
        method=result.method,
        shift=result.shift,
        source=result.source,
        explanation=result.explanation,
        self_destruct=result.self_destruct,
        countdown_seconds=result.countdown_seconds,
    )
