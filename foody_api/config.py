"""
Foody API testing configuration
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

DEFAULT_BASE_URL = "http://softuni-qa-loadbalancer-2137572849.eu-north-1.elb.amazonaws.com:86"


def _env(name: str, default: str):
    return field(default_factory=lambda: os.getenv(name, default))


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


@dataclass
class FoodyConfig:
    """Connection and credential settings for the Foody API"""

    base_url: str = _env('FOODY_BASE_URL', DEFAULT_BASE_URL)

    # Login credentials
    username: str = _env('FOODY_USERNAME', 'Lemonade')
    password: str = _env('FOODY_PASSWORD', '123asd')

    # Raw env strings are parsed in __post_init__
    timeout_seconds: float = _env('FOODY_TIMEOUT_SECONDS', '30')

    # Prefix for generated food names so test data is recognisable
    test_data_prefix: str = _env('FOODY_TEST_DATA_PREFIX', 'FoodyTest')

    # Run e2e tests against the remote server instead of the fake service
    live: bool = field(default_factory=lambda: _env_flag('FOODY_LIVE'))

    _parse_errors: list = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        self.base_url = self.base_url.strip().rstrip('/')

        try:
            self.timeout_seconds = float(self.timeout_seconds)
        except (TypeError, ValueError):
            self._parse_errors.append(f"FOODY_TIMEOUT_SECONDS must be a number, got {self.timeout_seconds!r}")

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors"""
        errors = list(self._parse_errors)

        if not self.base_url:
            errors.append("FOODY_BASE_URL is required")
        elif not self.base_url.startswith(("http://", "https://")):
            errors.append(f"FOODY_BASE_URL must be an http(s) URL, got {self.base_url!r}")

        if not self.username.strip():
            errors.append("FOODY_USERNAME is required for authentication")
        if not self.password.strip():
            errors.append("FOODY_PASSWORD is required for authentication")

        if isinstance(self.timeout_seconds, float) and self.timeout_seconds <= 0:
            errors.append("FOODY_TIMEOUT_SECONDS must be positive")

        return errors


def get_config(**overrides) -> FoodyConfig:
    """Get validated Foody configuration"""
    config = FoodyConfig(**overrides)
    errors = config.validate()

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return config
