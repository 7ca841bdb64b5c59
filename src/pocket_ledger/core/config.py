from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    environment: str = "dev"

    data_dir: Path = Path("./data")
    ledger_filename: str = "financial_data.json"

    # JSON file overriding sections of the built-in lexicon.
    lexicon_path: Path | None = None

    tesseract_lang: str = "spa"

    # Defines the processing date ("hoy") for extraction.
    timezone: str = "America/Bogota"

    @property
    def ledger_path(self) -> Path:
        root = self.data_dir
        if not root.is_absolute():
            root = Path.cwd() / root
        return root / self.ledger_filename


settings = Settings()
