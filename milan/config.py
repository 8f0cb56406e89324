from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ─── App ──────────────────────────────
    APP_NAME: str = "kundali-milan"
    ENV: str = "local"
    DEBUG: bool = False

    # ─── Logging ──────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
