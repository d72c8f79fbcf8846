import os
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

_CONFIG_PATH = os.getenv("AFK_KICKER_CONFIG", "config.toml")
_ENV_PATH = os.getenv("AFK_KICKER_ENV", ".env")


class AutoKickSettings(BaseModel):
    """Options for kicking players that stay out of a squad for too long."""

    model_config = ConfigDict(frozen=True)

    enabled: Annotated[
        bool,
        Field(description="Whether unassigned players are tracked and kicked"),
    ] = True

    warning_message: Annotated[
        str,
        Field(description="Message sent to players warning them they will be kicked"),
    ] = "Join a squad, you are unassigned and will be kicked"

    kick_message: Annotated[
        str,
        Field(description="Message sent to players when they are kicked"),
    ] = "Unassigned - automatically removed"

    frequency_of_warnings: Annotated[
        float,
        Field(description="How often in seconds an unassigned player is warned", gt=0),
    ] = 30

    afk_timer: Annotated[
        float,
        Field(
            description="How long in minutes an unassigned player may stay before being kicked",
            gt=0,
        ),
    ] = 6

    player_threshold: Annotated[
        int,
        Field(
            description="Player count above which kicking continues during the round start delay, zero or less disables",
        ),
    ] = 93

    queue_threshold: Annotated[
        int,
        Field(
            description="Queue size above which kicking continues during the round start delay, zero or less disables",
        ),
    ] = -1

    round_start_delay: Annotated[
        float,
        Field(
            description="Time in minutes after a round starts before kicking resumes",
            ge=0,
        ),
    ] = 15

    update_interval_seconds: Annotated[
        float,
        Field(description="Interval in seconds between roster reconciliations", gt=0),
    ] = 60

    cleanup_interval_seconds: Annotated[
        float,
        Field(
            description="Interval in seconds between scans for tracked players that left the server",
            gt=0,
        ),
    ] = 20 * 60

    roster_timeout_seconds: Annotated[
        float,
        Field(
            description="How long in seconds a roster request may take before the pass is abandoned",
            gt=0,
        ),
    ] = 10

    @property
    def warn_interval(self) -> float:
        """Seconds between two warnings."""
        return self.frequency_of_warnings

    @property
    def kick_timeout(self) -> float:
        """Seconds from the start of tracking until the kick."""
        return self.afk_timer * 60

    @property
    def grace_period(self) -> float:
        """Seconds after a round start during which nobody is tracked."""
        return self.round_start_delay * 60


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        toml_file=_CONFIG_PATH,
        env_file=_ENV_PATH,
        extra="ignore",
    )

    auto_kick: AutoKickSettings = Field(default_factory=AutoKickSettings)
    logs_dir: Path = Field(default=Path("logs"))

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Source order: init args > OS env > .env > config.toml > secrets
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


settings = Settings()
