"""Travel Guardian: trip price checks against flight, hotel and car rental budgets."""

__version__ = "1.0.0"
