"""
Configuration management using Pydantic Settings.

Provides type-safe access to:
- Link rewriting rules loaded from the packaged links.yaml
- Runtime settings (explorer base URL, HTTP timeout, worker count)
  loaded from environment variables and .env
"""

from importlib.resources import files
from typing import List, Optional
import yaml
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LinkRulesConfig(BaseSettings):
    """
    Link rewriting rules automatically loaded from cisapi/links.yaml.

    Documents returned by the explorer sometimes embed links that point at
    the internal CIS host instead of the public one. These rules describe
    which prefixes must be rewritten and which suffix every fetchable
    document carries.

    Attributes:
        legacy_prefixes: Link prefixes replaced by the public base URL
        document_suffix: Suffix appended to links that lack it

    Example:
        >>> rules = LinkRulesConfig()
        >>> rules.legacy_prefixes
        ['http://cis.local/cisapi/', 'https://cis.local/cisapi/']
        >>> rules.document_suffix
        '.xml'
    """

    legacy_prefixes: List[str] = Field(
        default_factory=list,
        description="Internal link prefixes rewritten to the public base URL"
    )
    document_suffix: str = Field(
        default=".xml",
        description="Suffix every fetchable document link must end with"
    )

    model_config = SettingsConfigDict(
        extra='ignore'
    )

    @model_validator(mode='before')
    @classmethod
    def load_yaml_config(cls, data: dict) -> dict:
        """
        Load rules from the packaged links.yaml if not already provided.

        The file ships inside the cisapi package, so loading does not depend
        on the working directory. Explicit values (e.g. from tests) take
        precedence over the file.
        """
        if data:
            return data

        resource = files('cisapi').joinpath('links.yaml')
        yaml_data = yaml.safe_load(resource.read_text(encoding='utf-8')) or {}

        return {
            'legacy_prefixes': yaml_data.get('legacy_prefixes', []),
            'document_suffix': yaml_data.get('document_suffix', '.xml')
        }


# Singleton pattern - loaded once, cached forever
_link_rules: Optional[LinkRulesConfig] = None


def get_link_rules() -> LinkRulesConfig:
    """
    Get global link rules instance (lazy-loaded singleton).

    Returns:
        Singleton LinkRulesConfig instance
    """
    global _link_rules
    if _link_rules is None:
        _link_rules = LinkRulesConfig()
    return _link_rules


class AppConfig(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Environment Variables (from .env):
        CISAPI_BASE_URL: Public explorer base URL
        CISAPI_REQUEST_TIMEOUT: HTTP timeout in seconds
        CISAPI_USER_AGENT: User-Agent header sent with every request
        CISAPI_MAX_WORKERS: Concurrent child fetches (1 = sequential)

    Example:
        >>> config = get_app_config()
        >>> config.base_url
        'https://courses.illinois.edu/cisapp/explorer/'
    """

    base_url: str = Field(
        default="https://courses.illinois.edu/cisapp/explorer/",
        description="Canonical public base URL of the Course Explorer API"
    )

    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout in seconds"
    )

    user_agent: str = Field(
        default="cisapi/0.1",
        description="User-Agent header sent with every request"
    )

    max_workers: int = Field(
        default=1,
        ge=1,
        description="Number of concurrent child fetches"
    )

    model_config = SettingsConfigDict(
        env_prefix='CISAPI_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    @model_validator(mode='after')
    def ensure_trailing_slash(self) -> 'AppConfig':
        """Relative paths are joined onto base_url, so it must end with '/'."""
        if not self.base_url.endswith('/'):
            self.base_url = self.base_url + '/'
        return self


# Singleton pattern - loaded once, cached forever
_app_config: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """
    Get global application config instance (lazy-loaded singleton).

    Configuration is loaded from environment variables and .env file.
    Cached after first access.

    Returns:
        Singleton AppConfig instance
    """
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config
