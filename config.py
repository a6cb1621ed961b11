"""
Test suite configuration module.

This module defines configuration classes for the environments the
suite runs in (local, ci).  Values are loaded from environment
variables with sensible defaults; credentials have no default and are
never stored in the repository.
"""

import os
from pathlib import Path

import yaml

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent


class Config:
    """Base configuration with default settings."""

    # Calculator under test; E2E tests are skipped when unset
    BASE_URL: str | None = os.environ.get("CALCULATOR_BASE_URL")

    TEST_USER_EMAIL: str | None = os.environ.get("TEST_USER_EMAIL")
    TEST_USER_PASSWORD: str | None = os.environ.get("TEST_USER_PASSWORD")

    DEFAULT_TIMEOUT_MS: int = int(os.environ.get("DEFAULT_TIMEOUT_MS", "10000"))
    STABILITY_TIMEOUT_MS: int = int(os.environ.get("STABILITY_TIMEOUT_MS", "5000"))
    REACHABILITY_TIMEOUT_MS: int = int(os.environ.get("REACHABILITY_TIMEOUT_MS", "30000"))

    THRESHOLDS_FILE: Path = Path(
        os.environ.get("THRESHOLDS_FILE", BASE_DIR / "tests" / "e2e" / "thresholds.yml")
    )


class LocalConfig(Config):
    """Configuration for running against a developer machine."""


class CIConfig(Config):
    """Configuration for CI runners, which are slower and shared."""

    DEFAULT_TIMEOUT_MS: int = int(os.environ.get("DEFAULT_TIMEOUT_MS", "20000"))
    STABILITY_TIMEOUT_MS: int = int(os.environ.get("STABILITY_TIMEOUT_MS", "10000"))
    REACHABILITY_TIMEOUT_MS: int = int(os.environ.get("REACHABILITY_TIMEOUT_MS", "60000"))


# Configuration mapping for easy access
config = {
    "local": LocalConfig,
    "ci": CIConfig,
    "default": LocalConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (local, ci).
             If None, uses TEST_ENV environment variable.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("TEST_ENV", "local")
    return config.get(env, config["default"])


def load_thresholds(path: Path) -> dict[str, int]:
    """
    Read per-action performance thresholds from a YAML file.

    Args:
        path: Path to a YAML file containing ``calculation_ms`` and
            ``login_ms`` keys.

    Returns:
        A dictionary with both thresholds as integer milliseconds.

    Raises:
        ValueError: If either key is missing or non-numeric.
    """
    with Path(path).open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    try:
        calculation_ms = int(data["calculation_ms"])
        login_ms = int(data["login_ms"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(
            "Thresholds file must define numeric calculation_ms and login_ms"
        ) from exc

    return {
        "calculation_ms": calculation_ms,
        "login_ms": login_ms,
    }
