from pathlib import Path
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/vocab-srs/config.toml",
        Path.home() / ".vocab-srs.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for vocab-srs.
    Supports loading from:
    1. Environment variables (VOCAB_SRS_*)
    2. Config file (~/.config/vocab-srs/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="VOCAB_SRS_",
        extra="ignore",
    )

    # Scheduling
    learner_level: Literal["beginner", "intermediate", "advanced"] = "intermediate"
    max_conflict_retries: int = Field(default=3, ge=0)

    # Output
    output_format: Literal["json", "yaml"] = "json"
    verbose: int = Field(default=1, ge=0)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Find the first existing file
        toml_file = None
        for f in config_files():
            if f.exists():
                toml_file = f
                break

        # Earlier sources win: CLI overrides, then env, then the file
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/vocab-srs/config.toml (if exists)
    3. Environment variables (VOCAB_SRS_*)
    4. cli_overrides (passed from Typer, None values dropped)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
