"""Image generation gateway: one stateless adapter per provider.

The gateway only holds the injected settings. The provider is chosen by an
explicit `Provider` tag, never by inspecting response shapes.
"""
import logging
from typing import Callable, Dict, Optional

from noteart.core.config import Settings, settings as default_settings
from noteart.infrastructure.ai.google_client import generate_with_gemini, generate_with_imagen
from noteart.infrastructure.ai.openai_client import generate_with_dalle
from noteart.infrastructure.ai.openrouter_client import edit_with_openrouter, generate_with_openrouter
from noteart.infrastructure.ai.schemas import GenerationOptions, GenerationResult, Provider

_log = logging.getLogger("noteart.ai.gateway")

Adapter = Callable[[Settings, str, GenerationOptions], GenerationResult]

ADAPTERS: Dict[Provider, Adapter] = {
    Provider.OPENAI: generate_with_dalle,
    Provider.OPENROUTER: generate_with_openrouter,
    Provider.GEMINI: generate_with_gemini,
    Provider.IMAGEN: generate_with_imagen,
}


class ImageGenerationGateway:
    def __init__(self, cfg: Optional[Settings] = None) -> None:
        self.cfg = cfg or default_settings

    def generate(
        self,
        prompt: str,
        provider: Provider = Provider.OPENROUTER,
        options: Optional[GenerationOptions] = None,
    ) -> GenerationResult:
        """Single attempt against `provider`; nothing is persisted."""
        provider = Provider(provider)
        adapter = ADAPTERS[provider]
        _log.info("generate provider=%s prompt_chars=%s", provider.value, len(prompt))
        return adapter(self.cfg, prompt, options or GenerationOptions())

    def edit(
        self,
        prompt: str,
        image_url: str,
        options: Optional[GenerationOptions] = None,
    ) -> GenerationResult:
        """Edits an existing image through OpenRouter."""
        _log.info("edit provider=openrouter prompt_chars=%s", len(prompt))
        return edit_with_openrouter(self.cfg, prompt, image_url, options or GenerationOptions())
