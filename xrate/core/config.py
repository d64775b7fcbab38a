from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings

ACCESS_KEY_ENV_VAR = "FIXER_IO_ACCESS_KEY"


class RateFetcherConfig(BaseModel):
    """Explicit configuration handed to a RateFetcher"""

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(..., description="Provider endpoint, dates are appended to it")
    access_key: str | None = Field(None, description="Provider access key")
    timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")


class Settings(BaseSettings):
    # Application
    app_name: str = "xrate API"
    app_version: str = "0.1.0"
    debug: bool = False

    # API Settings
    api_v1_prefix: str = "/api/v1"

    # Exchange rate provider
    exchange_api_base_url: str = "http://data.fixer.io/api"
    fixer_io_access_key: str | None = None
    http_timeout_seconds: float = 30.0

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def rate_fetcher_config(self, base_url: str | None = None) -> RateFetcherConfig:
        """Build the fetcher configuration from these settings"""
        return RateFetcherConfig(
            base_url=base_url or self.exchange_api_base_url,
            access_key=self.fixer_io_access_key,
            timeout=self.http_timeout_seconds,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
