"""
Image generation endpoints. Results are not persisted; attach them to a
note with POST /notes/{id}/ai-images.
"""
from fastapi import APIRouter, Depends

from noteart.api.deps import get_image_gateway, require_user_id
from noteart.api.schemas.ai import EditPayload, GeneratePayload
from noteart.infrastructure.ai.image_gateway import ImageGenerationGateway
from noteart.infrastructure.ai.schemas import GenerationOptions, GenerationResult

router = APIRouter(prefix="/ai", tags=["AI images"])


@router.post("/generate", response_model=GenerationResult, summary="Generate an image")
def generate(
    payload: GeneratePayload,
    _user_id: str = Depends(require_user_id),
    gateway: ImageGenerationGateway = Depends(get_image_gateway),
) -> GenerationResult:
    options = GenerationOptions(
        model=payload.model, size=payload.size, quality=payload.quality, style=payload.style
    )
    return gateway.generate(payload.prompt, payload.provider, options)


@router.post("/edit", response_model=GenerationResult, summary="Edit an existing image")
def edit(
    payload: EditPayload,
    _user_id: str = Depends(require_user_id),
    gateway: ImageGenerationGateway = Depends(get_image_gateway),
) -> GenerationResult:
    return gateway.edit(payload.prompt, payload.image_url, GenerationOptions(model=payload.model))
