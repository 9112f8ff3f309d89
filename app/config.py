from typing import List

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    REDIS_URL: str = "redis://localhost:6379/0"
    # Static dataset bundled with the service
    BIERGARTEN_DATA_PATH: str = "data/biergarten_data.json"
    # Overpass (OpenStreetMap) live lookup
    OVERPASS_API_URL: str = "https://overpass-api.de/api/interpreter"
    OVERPASS_RADIUS_M: int = 2000
    OVERPASS_AMENITY: str = "biergarten"
    OVERPASS_TIMEOUT: float = 30.0
    OVERPASS_CACHE_TTL: int = 600
    USER_AGENT: str = "biergarten-finder/1.0"
    DEFAULT_SOURCE: str = "static"
    # Map page defaults (Munich)
    DEFAULT_CENTER_LAT: float = 48.1351
    DEFAULT_CENTER_LON: float = 11.5820
    DEFAULT_ZOOM: int = 14
    TILE_URL: str = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
    TILE_ATTRIBUTION: str = '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
    GEOLOCATION_TIMEOUT_MS: int = 10000
    RATE_LIMIT_TIMES: int = 10
    RATE_LIMIT_SECONDS: int = 60
    CORS_ORIGINS: List[str] = ["https://*.onrender.com", "https://*.vercel.app"]
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
