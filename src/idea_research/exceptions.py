"""
Custom exceptions for idea research operations.
"""

class ResearchError(Exception):
    """Base exception for research operations"""
    pass

class InvalidInputError(ResearchError):
    """Raised when the research query is missing or blank"""
    pass

class QuotaExceededError(ResearchError):
    """Raised when an upstream provider reports a rate limit or exhausted quota"""
    pass

class RetriesExhaustedError(QuotaExceededError):
    """Raised when every retry attempt hit a rate limit or quota error"""

    def __init__(self, attempts: int, last_error: Exception = None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Failed after {attempts} retries")

class SearchError(ResearchError):
    """Raised when search operation fails"""
    pass

class ScrapeError(ResearchError):
    """Raised when a single page could not be scraped"""
    pass

class CompletionError(ResearchError):
    """Raised when the language model returns an unusable response"""
    pass

class DatabaseError(ResearchError):
    """Raised when database operations fail"""
    pass

class ConfigurationError(ResearchError):
    """Raised when configuration is invalid or missing"""
    pass
