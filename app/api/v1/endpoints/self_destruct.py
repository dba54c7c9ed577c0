from fastapi import APIRouter, HTTPException, status

from app.dependencies import RepositoryDep
from app.models.schemas import ErrorResponse, SelfDestructStatusResponse

router = APIRouter()


@router.get(
    "/{message_id}",
    response_model=SelfDestructStatusResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Unknown message id"},
    },
    summary="Get self-destruct status",
    description="Report whether a self-destructing message has been viewed.",
)
async def get_self_destruct_status(
    message_id: str,
    repository: RepositoryDep,
) -> SelfDestructStatusResponse:
    """Look up a self-destructing message in the ledger."""
    record = await repository.get_record(message_id)

    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "not_found", "message": f"Message '{message_id}' not found"},
        )

    return SelfDestructStatusResponse.model_validate(record)
