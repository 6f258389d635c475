from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    catalog_path: str | None = None
    frame_rate_hz: float = 60.0
    follow_zoom: int = 14
    map_center_lat: float = 23.4
    map_center_lon: float = 85.4
    map_zoom: int = 10
    fly_to_on_select: bool = True
    outbox_size: int = 120
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_prefix": "", "case_sensitive": False}


settings = Settings()
