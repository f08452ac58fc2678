"""Career-Scraper: selector-driven extraction of experience and education history."""

__version__ = "0.1.0"
