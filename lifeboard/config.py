"""Configuration file management for lifeboard."""

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from lifeboard.domain.models import DEFAULT_PAYDAY_DATES, PaydayConfig, UserId
from lifeboard.domain.payperiod import normalize_payday_dates

logger = logging.getLogger(__name__)

DEFAULT_USER = "default"
DEFAULT_CURRENCY = "PHP"
PAYDAY_TYPES = ("fixed", "custom", "monthly", "semiMonthly")


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "lifeboard" / "config.toml"


def default_config() -> dict[str, Any]:
    """Build the configuration written by 'lifeboard init'."""
    return {
        "user": DEFAULT_USER,
        "currency": DEFAULT_CURRENCY,
        "hide_amounts": True,
        "payday": {"type": "fixed", "dates": list(DEFAULT_PAYDAY_DATES)},
    }


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(default_config(), f)

    os.chmod(config_path, 0o600)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    A missing file yields the defaults, so commands work before 'init'.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return default_config()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_user_id(config_path: Path | None = None) -> UserId:
    """Get the opaque id of the user owning stored rows."""
    config = load_config(config_path)
    return UserId(str(config.get("user") or DEFAULT_USER))


def get_currency(config_path: Path | None = None) -> str:
    """Get the display currency code."""
    config = load_config(config_path)
    return str(config.get("currency") or DEFAULT_CURRENCY)


def get_hide_amounts(config_path: Path | None = None) -> bool:
    """Get the persisted privacy toggle (hide amounts)."""
    config = load_config(config_path)
    return bool(config.get("hide_amounts", True))


def get_payday_config(config_path: Path | None = None) -> PaydayConfig:
    """Get the payday configuration.

    Malformed or empty payday dates fall back to the defaults.
    """
    config = load_config(config_path)
    payday = config.get("payday")
    if not isinstance(payday, dict):
        return PaydayConfig()

    payday_type = payday.get("type", "fixed")
    if payday_type not in PAYDAY_TYPES:
        payday_type = "fixed"

    dates = payday.get("dates")
    raw_dates = dates if isinstance(dates, list) else None
    return PaydayConfig(type=payday_type, dates=tuple(normalize_payday_dates(raw_dates)))


def set_currency(currency: str, config_path: Path | None = None) -> None:
    """Set the display currency code."""
    config = load_config(config_path)
    config["currency"] = currency.upper()
    save_config(config, config_path)


def set_hide_amounts(hide: bool, config_path: Path | None = None) -> None:
    """Persist the privacy toggle."""
    config = load_config(config_path)
    config["hide_amounts"] = hide
    save_config(config, config_path)


def set_payday_dates(dates: list[int], payday_type: str = "custom", config_path: Path | None = None) -> list[int]:
    """Set the payday days of month.

    Args:
        dates: Days of month. Cleaned before saving.
        payday_type: One of PAYDAY_TYPES.
        config_path: Path to config file. If None, uses default location.

    Returns:
        The cleaned list of days that was saved.

    Raises:
        ValueError: If payday_type is not recognised.
    """
    if payday_type not in PAYDAY_TYPES:
        raise ValueError(f"Unknown payday type '{payday_type}'. Choose from: {', '.join(PAYDAY_TYPES)}")

    cleaned = normalize_payday_dates(dates)
    config = load_config(config_path)
    config["payday"] = {"type": payday_type, "dates": cleaned}
    save_config(config, config_path)
    return cleaned
