from pathlib import Path
from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    database_url: str = f"sqlite:///{BASE_DIR / 'sesbank.db'}"
    log_dir: Path = BASE_DIR / "data" / "logs"
    sentence_corpus_path: Path = Path(__file__).resolve().parent / "data" / "sentences_az.json"

    session_size: int = 20
    min_seconds_per_word: float = 0.3
    early_adopter_limit: int = 1000  # profiles below this count get the larger milestone rewards

    model_config = {"env_file": [BASE_DIR / ".env", BASE_DIR.parent / ".env"], "extra": "ignore"}


settings = Settings()
