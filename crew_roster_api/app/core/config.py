"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables so that no ``pydantic-settings`` dependency is
required.  Defaults are provided for all fields.  Tests construct
their own ``Settings`` instance and pass it to ``create_app`` instead
of mutating the environment.
"""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Crew Roster API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")

    # ``test`` enables the ``POST /test/reset`` route.  Any other value
    # (``development``, ``production``) leaves it unregistered.
    environment: str = os.getenv("ENVIRONMENT", "development")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Directory for uploaded rower photos.  Relative paths are resolved
    # against the project root by ``uploads_path``.
    uploads_dir: str = os.getenv("UPLOADS_DIR", "uploads")
    uploads_url_prefix: str = "/uploads"
    max_photo_bytes: int = int(os.getenv("MAX_PHOTO_BYTES", str(5 * 1024 * 1024)))

    # Comma-separated list of allowed origins.  Empty means every origin
    # is allowed but credentials are not.
    cors_allow_origins: str = os.getenv("CORS_ALLOW_ORIGINS", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    @property
    def test_routes_enabled(self) -> bool:
        return self.environment.lower() == "test"

    @property
    def uploads_path(self) -> Path:
        path = Path(self.uploads_dir)
        if path.is_absolute():
            return path
        base_dir = Path(__file__).resolve().parent.parent.parent.parent
        return (base_dir / path).resolve()

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
