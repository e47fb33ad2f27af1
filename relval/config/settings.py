"""
Configuration settings for the relative-value analytics core.

**Conceptual**: This module provides strongly-typed configuration objects that
load from environment variables (via .env files). All settings are validated
at load time, ensuring fail-fast behavior if a value is malformed.

**Why centralized config?**
  - Single source of truth for engine defaults (initial equity, annualization
    factor, Monte Carlo sample count, random seed, log level).
  - Easy to test (inject fake settings instead of reading from environment).
  - Fail-fast validation (non-numeric RELVAL_INITIAL_EQUITY → clear error at
    startup, not halfway through a backtest).

This module uses python-dotenv to load .env files and dataclasses for type safety.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env from project root (dev/local environments); missing file is a no-op
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def _parse_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got: {raw}")


def _parse_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {raw}")


@dataclass(frozen=True)
class AnalyticsSettings:
    """
    Defaults for the backtest and frontier engines.

    **Conceptual**: The engines are pure functions of their inputs, but a few
    constants are worth being able to override without touching code: the
    starting equity of a backtest, the annualization factor for Sharpe, how many
    portfolios the frontier samples, and an optional seed that makes every
    randomized engine reproducible.

    Attributes:
        initial_equity: Starting equity for backtests (default 100000).
                       Must be positive.
        periods_per_year: Annualization factor for Sharpe (default 252).
                         Must be positive.
        frontier_samples: Number of Monte Carlo portfolios the frontier draws
                         (default 1000). Must be non-negative.
        random_seed: Seed for the default random source. None means fresh OS
                    entropy on every call (non-reproducible runs).
    """
    initial_equity: float = 100_000.0
    periods_per_year: int = 252
    frontier_samples: int = 1000
    random_seed: Optional[int] = None

    def __post_init__(self):
        """Validate settings after initialization."""
        if self.initial_equity <= 0:
            raise ValueError(
                f"initial_equity must be positive, got: {self.initial_equity}"
            )
        if self.periods_per_year <= 0:
            raise ValueError(
                f"periods_per_year must be positive, got: {self.periods_per_year}"
            )
        if self.frontier_samples < 0:
            raise ValueError(
                f"frontier_samples must be non-negative, got: {self.frontier_samples}"
            )

    @classmethod
    def from_env(cls) -> "AnalyticsSettings":
        """
        Load analytics settings from environment variables.

        **Environment variables** (all optional):
          - RELVAL_INITIAL_EQUITY: Starting backtest equity (default 100000).
          - RELVAL_PERIODS_PER_YEAR: Sharpe annualization factor (default 252).
          - RELVAL_FRONTIER_SAMPLES: Frontier sample count (default 1000).
          - RELVAL_RANDOM_SEED: Integer seed for reproducible runs (default unset).

        Returns:
            AnalyticsSettings object with values loaded from environment.

        Raises:
            ValueError: If any variable is set but cannot be parsed, or parses
                        to an out-of-range value.
        """
        seed_str = os.getenv("RELVAL_RANDOM_SEED", "")
        random_seed = None
        if seed_str.strip():
            try:
                random_seed = int(seed_str)
            except ValueError:
                raise ValueError(
                    f"RELVAL_RANDOM_SEED must be an integer, got: {seed_str}"
                )

        return cls(
            initial_equity=_parse_float("RELVAL_INITIAL_EQUITY", "100000"),
            periods_per_year=_parse_int("RELVAL_PERIODS_PER_YEAR", "252"),
            frontier_samples=_parse_int("RELVAL_FRONTIER_SAMPLES", "1000"),
            random_seed=random_seed,
        )


@dataclass(frozen=True)
class LoggingSettings:
    """
    Logging configuration.

    Attributes:
        level: Minimum loguru level for the stderr sink (default "INFO").
    """
    level: str = "INFO"

    def __post_init__(self):
        if self.level not in _LOG_LEVELS:
            raise ValueError(
                f"RELVAL_LOG_LEVEL must be one of {list(_LOG_LEVELS)}, got: {self.level}"
            )

    @classmethod
    def from_env(cls) -> "LoggingSettings":
        return cls(level=os.getenv("RELVAL_LOG_LEVEL", "INFO").upper())


@dataclass(frozen=True)
class Settings:
    """
    Global settings for the analytics core.

    **Usage pattern**:
      ```python
      from relval.config.settings import get_settings

      settings = get_settings()
      settings.analytics.initial_equity  # 100000.0
      ```

    Attributes:
        analytics: Engine defaults.
        logging: Logging configuration.
    """
    analytics: AnalyticsSettings = field(default_factory=AnalyticsSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        """Load all subsystem settings from the environment."""
        return cls(
            analytics=AnalyticsSettings.from_env(),
            logging=LoggingSettings.from_env(),
        )


# Lazily loaded singleton. Tests can construct Settings(...) directly or call
# reset_settings() after changing the environment.
_default_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings singleton.

    Settings are loaded from environment on first call, then cached for reuse.

    Returns:
        Global Settings singleton.

    Raises:
        ValueError: If any environment variable is malformed.
    """
    global _default_settings

    if _default_settings is None:
        _default_settings = Settings.from_env()

    return _default_settings


def reset_settings():
    """
    Reset the global settings singleton (for testing).

    Clears the cached settings so the next get_settings() call re-reads the
    environment.
    """
    global _default_settings
    _default_settings = None
