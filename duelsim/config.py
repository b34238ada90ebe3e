from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    app_name: str = "Duelsim Balance Lab"
    debug: bool = False
    api_version: str = "v1"
    log_level: str = "INFO"

    # Duel engine selection: "ttk" (analytic Monte Carlo) or "raycast"
    duel_engine: str = "ttk"
    ttk_samples: int = 128
    ttk_workers: int = 1  # threads per Monte Carlo resolve

    # Encounter defaults
    default_max_time: float = 3.5  # seconds
    default_seed: int = 12345
    default_map_id: str = "map.sample.open"

    # Matchup sweeps
    matchup_rounds: int = 200
    max_matchup_rounds: int = 5000

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "DUELSIM_"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
