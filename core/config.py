from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # Diet planning
    kcal_per_kg: float = Field(7700.0, alias="KCAL_PER_KG")
    max_weekly_change_kg: float = Field(1.5, alias="MAX_WEEKLY_CHANGE_KG")
    training_day_calorie_ratio: float = Field(1.10, alias="TRAINING_DAY_CALORIE_RATIO")
    rest_day_calorie_ratio: float = Field(0.925, alias="REST_DAY_CALORIE_RATIO")

    # CORS / Web
    allowed_origins: str = Field("http://localhost:5173,http://localhost:3000", alias="ALLOWED_ORIGINS")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
