from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Catalog & Billing Service
    API_BASE_URL: str = "http://localhost:5000/api"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Selling screen
    SEARCH_DEBOUNCE_MS: int = 300
    PRODUCT_ID_WIDTH: int = 3
    DEFAULT_VARIANT: str = "Standard"

    # Reports
    LOW_STOCK_THRESHOLD: int = 10

    # Display
    CURRENCY_PREFIX: str = "Rs."


settings = Settings()
