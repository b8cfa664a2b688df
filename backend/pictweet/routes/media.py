"""
PicTweet Backend — Media Route
================================

What:  GET /media/{path} serves images written by StorageService.
How:   The path is resolved inside STORAGE_ROOT; anything outside it,
       or missing, maps to 400/404 through the global exception handlers.
"""

from fastapi import APIRouter
from fastapi.responses import FileResponse

from pictweet.schemas.common import ErrorResponse
from pictweet.services.storage_service import storage_service

router = APIRouter(tags=["Media"])


@router.get(
    "/media/{file_path:path}",
    response_class=FileResponse,
    responses={404: {"description": "File not found", "model": ErrorResponse}},
    summary="Download a stored tweet image",
)
async def get_media(file_path: str) -> FileResponse:
    full_path = storage_service.resolve_media_path(file_path)
    return FileResponse(
        full_path,
        headers={"Cache-Control": "public, max-age=31536000, immutable"},
    )
