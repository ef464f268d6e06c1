"""Central application configuration (Pydantic Settings).

- Loads variables from the `.env` at the project root.
- Groups settings by area: App, CORS, Mongo, Auth/JWT, Storage (R2), AI providers.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field
from pathlib import Path

# Resolves the .env at the project root (independent of the CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class Settings(BaseSettings):
    """Configuration values with reasonable defaults.

    Every value can be overridden through environment variables (.env).
    """
    # App
    app_name: str = "NoteArt API"
    api_prefix: str = "/api"
    # Public base of this API, used to build upload targets handed to clients
    public_api_url: str = "http://localhost:8000"
    log_level: str = "INFO"

    # CORS (Vite/React on localhost)
    cors_origins: list[str] = ["http://localhost:5173", "http://127.0.0.1:5173"]
    cors_allow_any: bool = False

    # Mongo
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db: str = "noteart"
    mongo_tls: bool = False
    mongo_tls_insecure: bool = False
    mongo_tls_allow_invalid_hostnames: bool = False

    # Auth / JWT
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    upload_token_expire_minutes: int = 10

    # Storage (R2, S3 compatible)
    r2_bucket: str | None = None
    r2_endpoint: str | None = None
    r2_account_id: str | None = None
    r2_region: str = "auto"
    r2_access_key: str | None = Field(
        None,
        validation_alias=AliasChoices("R2_ACCESS_KEY", "R2_ACCESS_KEY_ID"),
    )
    r2_secret_key: str | None = Field(
        None,
        validation_alias=AliasChoices("R2_SECRET_KEY", "R2_SECRET_ACCESS_KEY"),
    )
    r2_public_base_url: str | None = None
    r2_addressing_style: str = "path"
    storage_key_prefix: str = "notes/"
    storage_url_ttl_seconds: int = 3600

    # AI image providers
    openai_api_key: str | None = None
    openai_image_model: str = "dall-e-3"
    openrouter_api_key: str | None = None
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_image_model: str = "stability-ai/stable-diffusion-3"
    # Sent as HTTP-Referer to OpenRouter (required by the provider)
    site_url: str | None = Field(
        None,
        validation_alias=AliasChoices("SITE_URL", "NOTEART_SITE_URL"),
    )
    gemini_api_key: str | None = None
    gemini_text_url: str = (
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro-vision:generateContent"
    )
    google_project_id: str | None = None
    google_location: str = "us-central1"
    imagen_placeholder_fallback: bool = True
    image_request_timeout_seconds: int = 120

    # --- Derived helpers ---
    @property
    def api_prefix_normalized(self) -> str:
        """Returns `api_prefix` with a consistent shape.

        - Always starts with '/'
        - No trailing '/' (except when it is just '/')
        - Empty when unset
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    @property
    def openai_configured(self) -> bool:
        return bool(self.openai_api_key)

    @property
    def openrouter_configured(self) -> bool:
        return bool(self.openrouter_api_key and self.site_url)

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key)

    @property
    def storage_configured(self) -> bool:
        return bool(self.r2_bucket and self.r2_access_key and self.r2_secret_key)

    def upload_url(self, token: str) -> str:
        """Builds the upload target URL for a signed upload token."""
        base = self.public_api_url.rstrip("/")
        return f"{base}{self.api_prefix_normalized}/storage/upload?token={token}"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # unused variables are not an error
        populate_by_name=True,
    )


settings = Settings()
