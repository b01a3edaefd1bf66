"""Port-level exceptions for Recipes bounded context.

Raised by repositories and external collaborators, and translated to
HTTP responses at the presentation boundary.
"""


class DuplicateSlugError(Exception):
    """Raised when a category or tag slug is already used in the group."""

    pass


class DuplicateFavoriteError(Exception):
    """Raised when a user favorites a recipe twice."""

    pass


class FavoriteNotFoundError(Exception):
    """Raised when removing a favorite that does not exist."""

    pass


class ImportRateLimitExceededError(Exception):
    """Raised when a user has used up their import allowance for the window."""

    def __init__(self, limit: int, window_seconds: int):
        self.limit = limit
        self.window_seconds = window_seconds
        super().__init__(
            f"Rate limit exceeded. Maximum {limit} imports per "
            f"{_describe_window(window_seconds)}."
        )


class RecipeExtractionError(Exception):
    """Raised when the extraction service cannot produce a recipe."""

    def __init__(self, message: str = "Failed to extract recipe from URL"):
        super().__init__(message)


class ExtractorNotConfiguredError(Exception):
    """Raised when an import is attempted with no extraction service configured."""

    def __init__(
        self,
        message: str = (
            "Recipe import service is not configured. Please contact administrator."
        ),
    ):
        super().__init__(message)


def _describe_window(window_seconds: int) -> str:
    if window_seconds == 3600:
        return "hour"
    if window_seconds % 3600 == 0:
        return f"{window_seconds // 3600} hours"
    if window_seconds % 60 == 0:
        return f"{window_seconds // 60} minutes"
    return f"{window_seconds} seconds"
