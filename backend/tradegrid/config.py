"""Runtime settings, read from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .market.finnhub_client import DEFAULT_WS_URL


def _positive_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


def _port(env: Mapping[str, str], default: int) -> int:
    raw = env.get("PORT", "").strip()
    if not raw:
        return default
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"PORT must be an integer, got {raw!r}") from None
    if not 1 <= port <= 65535:
        raise ValueError(f"PORT must be between 1 and 65535, got {raw!r}")
    return port


@dataclass(frozen=True)
class FeedSettings:
    finnhub_api_key: str = ""
    finnhub_ws_url: str = DEFAULT_WS_URL
    fallback_window: float = 10.0
    reconnect_delay: float = 5.0
    sim_tick_interval: float = 2.0
    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"

    @property
    def live_enabled(self) -> bool:
        return bool(self.finnhub_api_key)

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> FeedSettings:
        """Build settings from ``env`` (defaults to ``os.environ``).

        FINNHUB_API_KEY unset, empty or whitespace → simulation only.
        Raises ValueError on non-numeric or non-positive durations, and on a
        PORT outside 1..65535.
        """
        env = os.environ if env is None else env
        defaults = cls()
        return cls(
            finnhub_api_key=env.get("FINNHUB_API_KEY", "").strip(),
            finnhub_ws_url=env.get("FINNHUB_WS_URL", "").strip() or defaults.finnhub_ws_url,
            fallback_window=_positive_float(env, "FEED_FALLBACK_WINDOW", defaults.fallback_window),
            reconnect_delay=_positive_float(env, "FEED_RECONNECT_DELAY", defaults.reconnect_delay),
            sim_tick_interval=_positive_float(env, "SIM_TICK_INTERVAL", defaults.sim_tick_interval),
            host=env.get("HOST", "").strip() or defaults.host,
            port=_port(env, defaults.port),
            log_level=env.get("LOG_LEVEL", "").strip().upper() or defaults.log_level,
        )
