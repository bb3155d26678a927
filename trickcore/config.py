"""Engine configuration using Pydantic settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRICKCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Match Configuration
    hand_size: int = Field(default=3, description="Cards dealt to each seat")
    total_rounds: int = Field(default=18, description="Rounds in a 2-player match")

    # Opponent Memory
    memory_decay: float = Field(default=0.95, description="Decay applied to behavior metrics")
    recent_actions_limit: int = Field(default=10, description="Capacity of the recent-actions buffer")
    trait_history_limit: int = Field(default=10, description="Trait snapshots kept for inspection")
    profile_history_limit: int = Field(default=20, description="Behavior snapshots kept per profile")

    # Bot Configuration
    default_personality: str = Field(default="analytical", description="Starting personality")
    default_difficulty: str = Field(default="medium", description="Starting difficulty")
    outcome_samples: int = Field(default=100, description="Samples per what-if lead comparison")
    rng_seed: int | None = Field(default=None, description="Seed for the shared random source")


# Global settings instance
settings = Settings()
