"""Configuration management for the Coach & Ad Studio application."""
import os
from dataclasses import dataclass
from typing import Final, Optional
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Backend Configuration
OPENAI_API_KEY: Final[str] = os.getenv('OPENAI_API_KEY', '')
TEXT_MODEL: Final[str] = os.getenv('STUDIO_TEXT_MODEL', 'gpt-4o-mini')
IMAGE_MODEL: Final[str] = os.getenv('STUDIO_IMAGE_MODEL', 'gpt-image-1')
REQUEST_TIMEOUT: Final[float] = float(os.getenv('STUDIO_REQUEST_TIMEOUT', '120'))

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'

# Image sizes accepted by the image model, per aspect ratio
IMAGE_SIZE_BY_RATIO: Final[dict[str, str]] = {
    "9:16": "1024x1536",
    "1:1": "1024x1024",
    "16:9": "1536x1024",
}
EXERCISE_IMAGE_RATIO: Final[str] = os.getenv('STUDIO_EXERCISE_IMAGE_RATIO', '1:1')

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
STATIC_DIR: Final[Path] = BASE_DIR / 'static'
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'


@dataclass(frozen=True)
class StudioConfig:
    """Explicit backend settings handed to the client (no hidden globals)."""
    text_model: str
    image_model: str
    api_key: Optional[str] = None
    request_timeout: float = 120.0

    @classmethod
    def from_env(cls) -> "StudioConfig":
        return cls(
            text_model=TEXT_MODEL,
            image_model=IMAGE_MODEL,
            api_key=OPENAI_API_KEY or None,
            request_timeout=REQUEST_TIMEOUT,
        )
