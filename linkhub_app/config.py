from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = True

    # Application
    app_name: str = "LinkHub"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Short links
    base_url: str = "http://127.0.0.1:8000"
    short_code_length: int = 6
    short_code_max_attempts: int = 10
    min_alias_length: int = 3

    # Short code generation strategy
    short_code_strategy: str = "random"  # Options: "random", "base62"
    short_code_salt: int = 916132832  # Offset for Base62 strategy (62^5, keeps codes 6 chars wide)

    # Analytics
    click_history_limit: int = 100
    dashboard_top_limit: int = 5
    default_page_size: int = 10

    # Geolocation
    geo_lookup_backend: str = "null"  # Options: "null", "static"
    geo_static_country: str = "Vietnam"
    geo_static_city: str = "Ho Chi Minh City"

    # Load the two sample links on startup
    seed_demo_data: bool = False

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
