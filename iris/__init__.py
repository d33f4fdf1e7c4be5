"""Iris — underwriter appetite matching for commercial insurance brokers.

Iris scores how well a client's risk profile fits each underwriter's stated
appetite (target sectors, premium bounds, risk appetite, geography and
exclusions) and ranks the underwriters into strong matches and nearest misses.
Every score comes with the reasons and concerns that produced it.
"""

__version__ = "0.1.0"
