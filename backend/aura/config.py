from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    aura_data_dir: Path = Path.home() / ".aura" / "data"
    sqlite_filename: str = "aura.db"
    default_quiz_count: int = 10
    default_challenge_card_limit: int = 8
    log_level: str = "WARNING"

    model_config = {"env_prefix": "AURA_"}


settings = Settings()
