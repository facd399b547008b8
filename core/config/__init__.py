"""
Farm Market Core Config — Public API
======================================
"""

from core.config.market import DEFAULT_CALLER_HEADER, MarketConfig

__all__ = [
    "DEFAULT_CALLER_HEADER",
    "MarketConfig",
]
