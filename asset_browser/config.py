#!/usr/bin/env python3
"""Environment configuration for the asset browser service."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .dictionary_loader import DEFAULT_DICTIONARY
from .errors import ConfigError

DEFAULT_PORT = 5174
DEFAULT_HOST = "127.0.0.1"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class BrowserConfig:
    """Settings read once at startup; read-only afterwards."""

    assets_root: Path
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    dictionary: str = DEFAULT_DICTIONARY
    stable_order: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "BrowserConfig":
        """
        Build the config from environment variables.

        Recognized variables: ``ASSETS_ROOT`` (required), ``HOST``, ``PORT``,
        ``ASSET_DICTIONARY`` and ``ASSET_STABLE_ORDER``. Keyword overrides
        (typically CLI flags) win when not None.

        Raises:
            ConfigError: if the root is missing or the port is not a number
        """
        env = os.environ if environ is None else environ
        values = {
            "assets_root": env.get("ASSETS_ROOT"),
            "host": env.get("HOST") or DEFAULT_HOST,
            "port": env.get("PORT") or DEFAULT_PORT,
            "dictionary": env.get("ASSET_DICTIONARY") or DEFAULT_DICTIONARY,
            "stable_order": (env.get("ASSET_STABLE_ORDER") or "").strip().lower() in _TRUE_VALUES,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})

        if not values["assets_root"]:
            raise ConfigError("Missing ASSETS_ROOT (set the variable or pass --root)")
        try:
            port = int(values["port"])
        except (TypeError, ValueError):
            raise ConfigError(f"PORT must be an integer, got {values['port']!r}") from None

        return cls(
            assets_root=Path(values["assets_root"]).expanduser(),
            host=str(values["host"]),
            port=port,
            dictionary=str(values["dictionary"]),
            stable_order=bool(values["stable_order"]),
        )
