"""Configuration helpers for the VogueCast client."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

from logic.prompts import ImageTheme

DEFAULT_TEXT_MODEL = "gemini-2.5-flash"
DEFAULT_IMAGE_MODEL = "gemini-2.5-flash-image"
DEFAULT_IMAGE_THEME = "flat_lay"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class VogueCastConfig:
    """Configuration values for the hosted model calls.

    A single API key is shared by the text and image models. It is not
    validated here; a missing or invalid key surfaces as a failed call.
    """

    api_key: Optional[str] = None
    text_model: str = DEFAULT_TEXT_MODEL
    image_model: str = DEFAULT_IMAGE_MODEL
    image_theme: str = DEFAULT_IMAGE_THEME
    enable_search: bool = True
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "VogueCastConfig":
        """Build a config from environment variables or an environment file.

        Environment specific files live in ``config/environments/<env>.yaml``
        by default and are merged with environment variables so that the API
        key can be injected by the runtime environment.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("VOGUECAST_CONFIG_DIR", "config/environments"))
        file_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            file_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, file_config.get(key, default))

        api_key = get_value("google_api_key") or get_value("api_key")
        text_model = get_value("text_model", DEFAULT_TEXT_MODEL)
        image_model = get_value("image_model", DEFAULT_IMAGE_MODEL)
        image_theme = get_value("image_theme", DEFAULT_IMAGE_THEME)
        enable_search = get_value("enable_search", "true")
        image_theme = str(image_theme or DEFAULT_IMAGE_THEME)
        allowed_themes = [theme.value for theme in ImageTheme]
        if image_theme not in allowed_themes:
            raise ValueError(f"image_theme must be one of {allowed_themes}, got {image_theme!r}")

        return cls(
            api_key=api_key,
            text_model=str(text_model or DEFAULT_TEXT_MODEL),
            image_model=str(image_model or DEFAULT_IMAGE_MODEL),
            image_theme=image_theme,
            enable_search=str(enable_search).strip().lower() in _TRUTHY,
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a flat ``key: value`` config file."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
