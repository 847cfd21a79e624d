"""
Exception hierarchy for level generation.
"""


class LevelGenerationError(Exception):
    pass


class CatalogError(LevelGenerationError):
    """Raised when a room template catalog is malformed."""
    pass


class EmptyCatalogError(CatalogError):
    """Raised when generation is attempted with zero templates."""

    def __init__(self, message: str = "Room template catalog has no templates"):
        super().__init__(message)


class GenerationFailedError(LevelGenerationError):
    """Raised when a collaborator (overlap oracle, instance factory) fails mid-run.

    The partially built level is not guaranteed to be consistent and should
    be discarded by the caller.
    """
    pass


class LevelFrozenError(LevelGenerationError):
    """Raised when a room is committed to a level that has completed generation."""
    pass
