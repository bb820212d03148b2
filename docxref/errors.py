"""Exceptions raised while loading and registering content units."""


class RegistryCollisionError(Exception):
    """Raised when the registry cannot accept the content set of a build."""


class DuplicateUidError(RegistryCollisionError):
    """Raised when two content units claim the same uid."""

    def __init__(self, uid: str, existing_source: str, new_source: str) -> None:
        """Record the colliding uid and the sources that both claimed it."""
        super().__init__(
            f"Duplicate uid '{uid}': declared by {existing_source} and {new_source}"
        )
        self.uid = uid
        self.existing_source = existing_source
        self.new_source = new_source


class ContentLoadError(Exception):
    """Raised when a source file cannot be turned into content units."""
