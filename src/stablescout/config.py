"""
Configuration for stablescout.

Two layers:
1. Timeouts - the bounded-time budgets every interaction runs under
2. EnvConfig - deployment settings (base URL, test user) read from the
   environment, with an optional .env file loaded first

All timeouts are in seconds; they are converted to milliseconds only when
handed to Playwright.
"""

import os
from dataclasses import dataclass
from typing import Dict, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv


class ConfigError(ValueError):
    """Raised when a configuration value is missing or malformed."""


@dataclass(frozen=True)
class Timeouts:
    """Time budgets for browser interactions (seconds)."""
    action: float = 10.0  # Underlying primitive (click, fill, ...)
    wait: float = 10.0  # Readiness wait before acting
    navigation: float = 30.0
    api: float = 15.0
    stability_pause: float = 0.1  # Aggressive-stability probe window

    @property
    def action_ms(self) -> float:
        return self.action * 1000

    @property
    def wait_ms(self) -> float:
        return self.wait * 1000

    @property
    def navigation_ms(self) -> float:
        return self.navigation * 1000

    @property
    def api_ms(self) -> float:
        return self.api * 1000

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> "Timeouts":
        """
        Build timeouts from STABLESCOUT_* environment variables.

        Recognized variables (seconds):
            STABLESCOUT_ACTION_TIMEOUT
            STABLESCOUT_WAIT_TIMEOUT
            STABLESCOUT_NAVIGATION_TIMEOUT
            STABLESCOUT_API_TIMEOUT
            STABLESCOUT_STABILITY_PAUSE

        Unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            action=_read_seconds(env, "STABLESCOUT_ACTION_TIMEOUT", defaults.action),
            wait=_read_seconds(env, "STABLESCOUT_WAIT_TIMEOUT", defaults.wait),
            navigation=_read_seconds(
                env, "STABLESCOUT_NAVIGATION_TIMEOUT", defaults.navigation
            ),
            api=_read_seconds(env, "STABLESCOUT_API_TIMEOUT", defaults.api),
            stability_pause=_read_seconds(
                env, "STABLESCOUT_STABILITY_PAUSE", defaults.stability_pause
            ),
        )


def _read_seconds(env, name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number of seconds, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class EnvConfig:
    """Deployment settings for a test run."""
    base_url: str = "https://automationexercise.com"
    user_email: str = "testuser@antigravity.dev"
    user_password: str = "Test@1234"
    user_name: str = "Antigravity Tester"
    api_token: Optional[str] = None
    ci: Optional[str] = None

    @property
    def is_ci(self) -> bool:
        return bool(self.ci)

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "base_url": self.base_url,
            "user_email": self.user_email,
            "user_name": self.user_name,
            "api_token": "***" if self.api_token else None,
            "ci": self.ci,
        }


def load_env_config(
    env_file: Optional[str] = None,
    environ: Optional[Dict[str, str]] = None,
) -> EnvConfig:
    """
    Load EnvConfig from the environment.

    Args:
        env_file: Path to a .env file (default: search from the working directory)
        environ: Mapping to read instead of os.environ (skips .env loading)

    Returns:
        Validated EnvConfig

    Raises:
        ConfigError: If BASE_URL is not an http(s) URL or USER_EMAIL is not an email
    """
    if environ is None:
        load_dotenv(env_file)
        environ = os.environ

    defaults = EnvConfig()
    config = EnvConfig(
        base_url=environ.get("BASE_URL") or defaults.base_url,
        user_email=environ.get("USER_EMAIL") or defaults.user_email,
        user_password=environ.get("USER_PASSWORD") or defaults.user_password,
        user_name=environ.get("USER_NAME") or defaults.user_name,
        api_token=environ.get("API_TOKEN") or None,
        ci=environ.get("CI") or None,
    )

    parsed = urlparse(config.base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"BASE_URL must be an http(s) URL, got {config.base_url!r}")

    local, _, domain = config.user_email.partition("@")
    if not local or "." not in domain:
        raise ConfigError(f"USER_EMAIL must be an email address, got {config.user_email!r}")

    return config
