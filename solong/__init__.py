"""A terminal tile game of coins, an exit and a wandering enemy, with map file validation."""

__version__ = "0.1.0"