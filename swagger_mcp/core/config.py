# The module is to define the configuration settings for the application.
# Author: Shibo Li
# Date: 2026-10-19
# Version: 0.2.0

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Dict, Optional

# Used when neither the configuration nor the description declares an API root.
DEFAULT_API_BASE_URL = "https://petstore.swagger.io/v2"


class Settings(BaseSettings):
    """
    The Settings class is used to define the configuration settings for the application.
    It inherits from BaseSettings, which allows it to load environment variables
    and provides type validation for the settings.
    Attributes:
        SWAGGER_API_URL (str): Locator of the Swagger/OpenAPI description document.
        API_BASE_URL (Optional[str]): API root used for invocations, overriding the
            servers declared by the description.
        AUTH_HEADER_NAME (Optional[str]): Name of the authentication header.
        AUTH_HEADER_PREFIX (Optional[str]): Prefix of the header value, e.g. 'Bearer'.
        AUTH_TOKEN_VALUE (Optional[SecretStr]): The authentication token.
        REST_HEADERS (Dict[str, str]): Static headers sent with every invocation.
        REQUEST_TIMEOUT (float): Timeout in seconds for outbound requests.
        SKIP_SWAGGER_DISCOVERY (bool): Skip discovery at startup (e.g. during tests).
        LOG_LEVEL (str): Level of the console logger.
    """
    # Description document
    SWAGGER_API_URL: str = "https://petstore.swagger.io/v2/swagger.json"
    SKIP_SWAGGER_DISCOVERY: bool = False

    # Target API
    API_BASE_URL: Optional[str] = None
    REQUEST_TIMEOUT: float = 5.0

    # Authentication header: sent only when all three are set
    AUTH_HEADER_NAME: Optional[str] = None
    AUTH_HEADER_PREFIX: Optional[str] = None
    AUTH_TOKEN_VALUE: Optional[SecretStr] = None

    # Custom headers, e.g. REST_HEADERS='{"X-Api-Key": "...", "Client-ID": "..."}'
    REST_HEADERS: Dict[str, str] = {}

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    def auth_header(self) -> Optional[tuple[str, str]]:
        """Returns the (name, value) of the authentication header, or None if not configured."""
        token = self.AUTH_TOKEN_VALUE.get_secret_value() if self.AUTH_TOKEN_VALUE else None
        if not self.AUTH_HEADER_NAME or not self.AUTH_HEADER_PREFIX or not token:
            return None
        return self.AUTH_HEADER_NAME, f"{self.AUTH_HEADER_PREFIX} {token}"


# lru_cache to cache the settings instance.
@lru_cache
def get_settings() -> Settings:
    return Settings()


if __name__ == "__main__":
    settings = get_settings()
    print(settings.model_dump_json(indent=4))
