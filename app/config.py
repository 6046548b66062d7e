from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    default_tz: str = "UTC"  # "now" and day boundaries for streaks/weekends
    dashboard_api_key: str | None = None

    # Single demo user (no multi-user isolation)
    demo_user_id: str = "demo-user"
    seed_demo_data: bool = True

    # Dashboard aggregation
    dashboard_notes_limit: int = 5  # Latest N notes embedded in /api/dashboard

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
