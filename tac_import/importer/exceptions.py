"""Importer exception definitions."""


class TacImportError(Exception):
    """Base exception for import operations."""

    pass


class PayloadError(TacImportError):
    """The import payload is not a usable batch.

    Raised before anything in the world is touched.
    """

    pass


class EntityCreationError(TacImportError):
    """The world model rejected a create request.

    Attributes:
        kind: Kind of object that could not be created.
        name: Name of the object.
    """

    def __init__(self, kind: str, name: str, message: str | None = None) -> None:
        super().__init__(message or f"Failed to create {kind}: {name}")
        self.kind = kind
        self.name = name


class PageNotFoundError(TacImportError):
    """No page exists for a scene."""

    def __init__(self, scene_name: str) -> None:
        super().__init__(f"No page found for scene: {scene_name}")
        self.scene_name = scene_name
