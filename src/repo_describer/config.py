from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigError(Exception):
    pass


class LLMConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    openai_api_key: str
    openai_base_url: str = "https://api.openai.com/v1"
    model_name: str = "gpt-4o-2024-05-13"
    request_timeout: float = 120.0  # seconds per completion
    max_retries: int = 0  # handed to the SDK client, never retried by the pipeline


class ScanConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    ignore_file_name: str = ".gitignore"
    vcs_dir: str = ".git"


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
    llm: LLMConfig = Field(default_factory=LLMConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
    output_root: Path = Path("data")


def load_config() -> Config:
    try:
        return Config(llm=LLMConfig(), scan=ScanConfig())
    except ValidationError as exc:
        missing = [
            ".".join(str(loc) for loc in e["loc"]).upper()
            for e in exc.errors()
            if e["type"] == "missing"
        ]
        if missing:
            raise ConfigError(f"Missing required setting(s): {', '.join(missing)}") from exc
        raise ConfigError(f"Invalid configuration: {exc}") from exc


@lru_cache
def get_config() -> Config:
    return load_config()
