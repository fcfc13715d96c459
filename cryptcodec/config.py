from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    SHA1_CRYPT_ITERATIONS: int = 40000
    RAISE_ON_FAILURE: bool = False
    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="CRYPTCODEC_", env_file=".env", extra="ignore", frozen=True
    )

settings = Settings()
