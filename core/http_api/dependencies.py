"""
Farm Market HTTP API - Dependencies
=====================================
Objects injected into handlers.
"""

from __future__ import annotations

from dataclasses import dataclass

from core.config.market import MarketConfig


@dataclass(frozen=True)
class HttpApiDependencies:
    registry: object
    config: MarketConfig
