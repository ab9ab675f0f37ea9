"""quotewatch: stock quote lookup API with accounts, favorites and a premium tier."""

__version__ = "0.1.0"
