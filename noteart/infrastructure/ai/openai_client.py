"""DALL-E image generation through the OpenAI SDK."""
import logging

from openai import OpenAI, OpenAIError

from noteart.core.config import Settings
from noteart.core.exceptions import GenerationFailed, MissingConfiguration
from noteart.core.time import now_iso
from noteart.infrastructure.ai.schemas import (
    GenerationOptions,
    GenerationResult,
    ImageMetadata,
    Provider,
)

_log = logging.getLogger("noteart.ai.openai")

DEFAULT_SIZE = "1024x1024"
DEFAULT_QUALITY = "standard"
DEFAULT_STYLE = "natural"


def get_openai(cfg: Settings) -> OpenAI:
    """
    Builds an OpenAI client from the injected settings.
    One attempt per call: the SDK's automatic retries are disabled.
    """
    if not cfg.openai_api_key:
        raise MissingConfiguration("OPENAI_API_KEY not configured")
    return OpenAI(
        api_key=cfg.openai_api_key,
        max_retries=0,
        timeout=cfg.image_request_timeout_seconds,
    )


def generate_with_dalle(cfg: Settings, prompt: str, options: GenerationOptions) -> GenerationResult:
    client = get_openai(cfg)
    size = options.size or DEFAULT_SIZE
    quality = options.quality or DEFAULT_QUALITY
    style = options.style or DEFAULT_STYLE
    try:
        resp = client.images.generate(
            model=options.model or cfg.openai_image_model,
            prompt=prompt,
            n=1,
            size=size,
            quality=quality,
            style=style,
        )
        url = resp.data[0].url if resp.data else None
    except OpenAIError as e:
        _log.warning("DALL-E generation failed: %s", e)
        raise GenerationFailed() from e
    if not url:
        raise GenerationFailed("OpenAI returned no image URL")
    return GenerationResult(
        success=True,
        image_url=url,
        prompt=prompt,
        generated_at=now_iso(),
        provider=Provider.OPENAI,
        metadata=ImageMetadata(size=size, quality=quality, style=style),
    )
