"""Google image adapters: legacy Gemini prompt call and Imagen (Vertex AI).

Their failure policies differ. Gemini propagates GenerationFailed; Imagen
answers with a placeholder image unless `IMAGEN_PLACEHOLDER_FALLBACK` is off.
"""
import logging
import random

import requests

from noteart.core.config import Settings
from noteart.core.exceptions import GenerationFailed, MissingConfiguration
from noteart.core.time import now_iso
from noteart.infrastructure.ai.schemas import GenerationOptions, GenerationResult, Provider

_log = logging.getLogger("noteart.ai.google")

GEMINI_PLACEHOLDER_URL = "https://via.placeholder.com/512x512?text=AI+Generated+Image"
IMAGEN_URL = (
    "https://aiplatform.googleapis.com/v1/projects/{project}/locations/{location}"
    "/publishers/google/models/imagegeneration:predict"
)


def _api_key(cfg: Settings) -> str:
    if not cfg.gemini_api_key:
        raise MissingConfiguration("GEMINI_API_KEY not configured")
    return cfg.gemini_api_key


def enhance_prompt(prompt: str) -> str:
    return (
        f'Create a high-quality, detailed image based on this description: "{prompt}".\n'
        "Style: Clean, modern, artistic, suitable for a note-taking app.\n"
        "Quality: High resolution, vibrant colors, professional composition."
    )


def picsum_placeholder() -> str:
    return f"https://picsum.photos/512/512?random={random.randint(0, 999)}"


def generate_with_gemini(cfg: Settings, prompt: str, options: GenerationOptions) -> GenerationResult:
    """
    Legacy flow: Gemini has no image endpoint here, so the model is asked for
    an image prompt and a fixed placeholder image is returned with the
    enhanced prompt.
    """
    key = _api_key(cfg)
    enhanced = enhance_prompt(prompt)
    try:
        r = requests.post(
            cfg.gemini_text_url,
            params={"key": key},
            json={
                "contents": [{"parts": [{"text": f"Generate an image prompt for: {enhanced}"}]}],
                "generationConfig": {"temperature": 0.7, "maxOutputTokens": 200},
            },
            timeout=cfg.image_request_timeout_seconds,
        )
        r.raise_for_status()
    except requests.RequestException as e:
        _log.warning("Gemini request failed: %s", e)
        raise GenerationFailed() from e
    return GenerationResult(
        success=True,
        image_url=GEMINI_PLACEHOLDER_URL,
        prompt=enhanced,
        generated_at=now_iso(),
        provider=Provider.GEMINI,
    )


def _imagen_placeholder(cfg: Settings, prompt: str, reason: str) -> GenerationResult:
    if not cfg.imagen_placeholder_fallback:
        raise GenerationFailed(f"Imagen API error: {reason}")
    _log.info("Imagen not available (%s), returning placeholder", reason)
    return GenerationResult(
        success=True,
        image_url=picsum_placeholder(),
        prompt=prompt,
        generated_at=now_iso(),
        provider=Provider.IMAGEN,
    )


def generate_with_imagen(cfg: Settings, prompt: str, options: GenerationOptions) -> GenerationResult:
    key = _api_key(cfg)
    if not cfg.google_project_id:
        raise MissingConfiguration("GOOGLE_PROJECT_ID not configured")
    url = IMAGEN_URL.format(project=cfg.google_project_id, location=cfg.google_location)
    try:
        r = requests.post(
            url,
            headers={"Authorization": f"Bearer {key}", "Content-Type": "application/json"},
            json={
                "instances": [{"prompt": prompt}],
                "parameters": {
                    "sampleCount": 1,
                    "aspectRatio": "1:1",
                    "safetyFilterLevel": "block_some",
                    "personGeneration": "allow_adult",
                },
            },
            timeout=cfg.image_request_timeout_seconds,
        )
    except requests.RequestException as e:
        return _imagen_placeholder(cfg, prompt, str(e))
    if not r.ok:
        return _imagen_placeholder(cfg, prompt, f"status {r.status_code}")
    try:
        body = r.json()
    except ValueError as e:
        return _imagen_placeholder(cfg, prompt, f"invalid JSON: {e}")
    predictions = body.get("predictions") if isinstance(body, dict) else None
    prediction = predictions[0] if isinstance(predictions, list) and predictions else {}
    if not isinstance(body, dict) or not isinstance(prediction, dict):
        return _imagen_placeholder(cfg, prompt, "unexpected response")
    encoded = prediction.get("bytesBase64Encoded")
    image_url = f"data:image/png;base64,{encoded}" if encoded else picsum_placeholder()
    return GenerationResult(
        success=True,
        image_url=image_url,
        prompt=prompt,
        generated_at=now_iso(),
        provider=Provider.IMAGEN,
    )
