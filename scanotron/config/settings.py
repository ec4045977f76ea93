from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    log_level: str = "WARNING"

    tools_dir: Path = Path("..")
    build_target: str = "net9.0"

    extractor_tool: str = "pdfbrrr"
    extractor_prompt: str = "split-happens"
    extractor_path: Path | None = None

    splitter_tool: str = "split-happens"
    splitter_path: Path | None = None

    cache_extension: str = ".brrr"

    api_key: str = ""
