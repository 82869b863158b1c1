"""
Exception types for the OrganAIzer service.
"""


class OrganizerError(Exception):
    """Base class for all OrganAIzer errors."""


class InvalidRequestError(OrganizerError):
    """The caller sent a request we cannot process (missing data, bad option)."""


class LLMError(OrganizerError):
    """The chat-completion collaborator failed or returned nothing usable."""


class CategoryParseError(OrganizerError):
    """The model's category answer was not a usable category map."""
