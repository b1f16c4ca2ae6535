"""
bondcurve: deterministic pricing for a three-segment bonding-curve token sale.
"""

__version__ = "0.1.0"
