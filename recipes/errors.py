"""
Error taxonomy for the recipe finder.

Service failures are raised by connectors as RecipeServiceError subclasses and are
caught at the orchestrator boundary, where they become user-facing error text.
None of them propagate past the orchestrator.

EmptyQueryError is raised and handled inside the orchestrator; it never reaches a
connector.
"""


class RecipeServiceError(Exception):
    """
    Base class for failures reported by a recipe connector.

    The message is shown to the user after a short prefix, so it should be
    readable on its own (e.g. "request timed out after 10s").
    """
    pass


class NoResults(RecipeServiceError):
    """The service answered but matched no recipes."""
    pass


class NotFound(RecipeServiceError):
    """No recipe exists for the requested identifier."""
    pass


class ServiceUnavailable(RecipeServiceError):
    """The service answered without the single recipe it should always return."""
    pass


class NetworkError(RecipeServiceError):
    """
    Transport failure.

    Raised for:
    - Timeouts and connection errors
    - Non-2xx HTTP responses
    - Any other requests.RequestException
    """
    pass


class MalformedResponse(RecipeServiceError):
    """The payload could not be parsed into the expected shape."""
    pass


class EmptyQueryError(ValueError):
    """A search that needs a query term was submitted without one."""
    pass
