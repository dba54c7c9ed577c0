from fastapi import APIRouter

from app.api.v1.endpoints import decode, detect, encode, self_destruct, share

api_router = APIRouter()

api_router.include_router(
    encode.router,
    prefix="/encode",
    tags=["Encoding"],
)

api_router.include_router(
    decode.router,
    prefix="/decode",
    tags=["Decoding"],
)

api_router.include_router(
    detect.router,
    prefix="/detect",
    tags=["Detection"],
)

api_router.include_router(
    share.router,
    prefix="/share",
    tags=["Sharing"],
)

api_router.include_router(
    self_destruct.router,
    prefix="/self-destruct",
    tags=["Self-destruct"],
)
