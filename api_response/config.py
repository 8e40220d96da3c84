import os


class Settings:
    """Library settings with environment variable overrides."""

    DEBUG: bool = os.getenv("API_RESPONSE_DEBUG", "false").lower() == "true"

    # Pagination defaults
    DEFAULT_PAGE: int = int(os.getenv("API_RESPONSE_DEFAULT_PAGE", "1"))
    DEFAULT_PAGE_SIZE: int = int(os.getenv("API_RESPONSE_DEFAULT_PAGE_SIZE", "10"))

    # Messages
    SUCCESS_MESSAGE: str = "Request successfully completed."


settings = Settings()
