# src/strady/adapters/config.py
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    # App & logging
    ENV: str = Field(default="dev")
    LOG_LEVEL: str = Field(default="INFO")

    # HTTP server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3001, validation_alias=AliasChoices("STRADY_PORT", "PORT"))
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: ["*"])

    # -----------------------------
    # Loan rate table (single-slot file)
    # -----------------------------
    DATA_DIR: Path = Field(default=Path("data"))
    RATES_FILENAME: str = Field(default="rate-per-duration.csv")

    # -----------------------------
    # PDF summary
    # -----------------------------
    PDF_CHUNK_SIZE: int = Field(default=8192)

    model_config = SettingsConfigDict(
        env_prefix="STRADY_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("RATES_FILENAME")
    @classmethod
    def _plain_filename(cls, v: str) -> str:
        name = v.strip()
        if not name or Path(name).name != name:
            raise ValueError("RATES_FILENAME must be a bare file name")
        return name

    @field_validator("PDF_CHUNK_SIZE")
    @classmethod
    def _chunk_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("PDF_CHUNK_SIZE must be > 0")
        return v

    @property
    def rates_path(self) -> Path:
        return self.DATA_DIR / self.RATES_FILENAME


config = AppConfig()
