"""Minimal HTTP client for OpenRouter image generation and editing."""
import logging
from typing import Any, Dict

import requests

from noteart.core.config import Settings
from noteart.core.exceptions import GenerationFailed, MissingConfiguration
from noteart.core.time import now_iso
from noteart.infrastructure.ai.schemas import GenerationOptions, GenerationResult, Provider

_log = logging.getLogger("noteart.ai.openrouter")

APP_TITLE = "NoteArt AI"


def _headers(cfg: Settings) -> Dict[str, str]:
    if not cfg.openrouter_api_key:
        raise MissingConfiguration("OPENROUTER_API_KEY not configured")
    if not cfg.site_url:
        raise MissingConfiguration("SITE_URL not configured")
    return {
        "Authorization": f"Bearer {cfg.openrouter_api_key}",
        "Content-Type": "application/json",
        "HTTP-Referer": cfg.site_url,
        "X-Title": APP_TITLE,
    }


def _post_images(cfg: Settings, path: str, body: Dict[str, Any]) -> str:
    """
    POSTs to `{base}/images/{path}` and returns `data[0].url`.
    Any non-2xx, transport error or unexpected shape becomes GenerationFailed.
    """
    headers = _headers(cfg)
    url = f"{cfg.openrouter_base_url.rstrip('/')}/images/{path}"
    try:
        r = requests.post(url, json=body, headers=headers, timeout=cfg.image_request_timeout_seconds)
    except requests.RequestException as e:
        _log.warning("OpenRouter request failed: %s", e)
        raise GenerationFailed("Failed to generate image with OpenRouter. Please try again.") from e
    if not r.ok:
        _log.warning("OpenRouter error status=%s body=%s", r.status_code, r.text[:500])
        raise GenerationFailed(f"OpenRouter API error: {r.reason} - {r.text}")
    try:
        return r.json()["data"][0]["url"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise GenerationFailed("OpenRouter returned an unexpected response") from e


def generate_with_openrouter(cfg: Settings, prompt: str, options: GenerationOptions) -> GenerationResult:
    image_url = _post_images(
        cfg,
        "generations",
        {"model": options.model or cfg.openrouter_image_model, "prompt": prompt, "n": 1},
    )
    return GenerationResult(
        success=True,
        image_url=image_url,
        prompt=prompt,
        generated_at=now_iso(),
        provider=Provider.OPENROUTER,
    )


def edit_with_openrouter(cfg: Settings, prompt: str, image_url: str, options: GenerationOptions) -> GenerationResult:
    """Produces a new image from `image_url` guided by `prompt`."""
    out_url = _post_images(
        cfg,
        "edits",
        {
            "model": options.model or cfg.openrouter_image_model,
            "prompt": prompt,
            "image": image_url,
            "n": 1,
        },
    )
    return GenerationResult(
        success=True,
        image_url=out_url,
        prompt=prompt,
        generated_at=now_iso(),
        provider=Provider.OPENROUTER,
    )
