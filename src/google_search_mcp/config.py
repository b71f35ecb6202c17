"""
Configuration for the Google Search MCP server.

Settings are read once at startup from the environment and an optional
``.env`` file. Credentials are extracted from them and handed explicitly to
the search client.
"""

import sys
from pathlib import Path

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from google_search_mcp.errors import ConfigurationError

ENV_FILE = '.env'


class Credentials(BaseModel):
    """Google Custom Search credentials, read-only for the process lifetime."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    search_engine_id: str


class Settings(BaseSettings):
    """Server settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

    google_api_key: str | None = Field(
        None, description='Google API key for Custom Search'
    )
    google_search_engine_id: str | None = Field(
        None, description='Google Programmable Search Engine ID (cx)'
    )
    log_level: str = Field('INFO', description='Log level for the stderr sink')
    log_file: str | None = Field(None, description='Optional log file path')
    request_timeout: float = Field(
        10.0, gt=0, description='HTTP timeout in seconds for search requests'
    )
    server_name: str = Field(
        'Google Search MCP Server', description='Server name reported to clients'
    )
    server_version: str = Field('1.0.0', description='Server version')

    def get_credentials(self) -> Credentials:
        """
        Return the configured credentials.

        Raises:
            ConfigurationError: If either credential is missing or empty
        """
        if not self.google_api_key or not self.google_search_engine_id:
            raise ConfigurationError(
                'GOOGLE_API_KEY and GOOGLE_SEARCH_ENGINE_ID environment variables are required'
            )
        return Credentials(
            api_key=self.google_api_key,
            search_engine_id=self.google_search_engine_id,
        )


def load_settings(env_file: str | None = ENV_FILE) -> Settings:
    """
    Load settings, warning when the ``.env`` file is absent.

    Raises:
        ConfigurationError: If a setting has an invalid value
    """
    if env_file and not Path(env_file).exists():
        logger.warning(f'{env_file} file not found. Using environment variables.')
        env_file = None
    try:
        return Settings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigurationError(f'Invalid settings: {e}') from e


def setup_logging(level: str = 'INFO', log_file: str | None = None) -> None:
    """Set up loguru sinks.

    Logs always go to stderr; stdout carries the stdio protocol stream.

    Args:
        level: Minimum level for all sinks
        log_file: Optional path for an additional rotating file sink
    """
    logger.remove()
    logger.add(sys.stderr, level=level.upper())

    if log_file:
        logger.add(log_file, level=level.upper(), rotation='10 MB')
