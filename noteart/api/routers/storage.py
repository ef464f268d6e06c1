"""Upload endpoints: get a signed target, then POST the raw image bytes to it."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from starlette.concurrency import run_in_threadpool

from noteart.api.deps import get_current_user_id
from noteart.api.schemas.storage import UploadOut, UploadTargetOut
from noteart.services import storage_service

router = APIRouter(prefix="/storage", tags=["Storage"])


@router.post("/upload-url", response_model=UploadTargetOut, summary="Generate an upload target")
def generate_upload_url(user_id: Optional[str] = Depends(get_current_user_id)) -> UploadTargetOut:
    return UploadTargetOut(**storage_service.generate_upload_target(user_id))


@router.post(
    "/upload",
    response_model=UploadOut,
    summary="Upload raw bytes",
    description="Body is the raw file; `Content-Type` is stored with the blob. Returns the storage id.",
)
async def upload(request: Request, token: str = Query(..., description="Token from /storage/upload-url")) -> UploadOut:
    body = await request.body()
    # boto3 is blocking; keep it off the event loop
    storage_id = await run_in_threadpool(
        storage_service.store_upload, token, body, request.headers.get("content-type")
    )
    return UploadOut(storage_id=storage_id)
