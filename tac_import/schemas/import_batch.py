"""Import payload schemas for TAC exports.

The batch itself is only checked for shape (an object holding three lists).
Each item is validated on its own by the importer so that one bad item
fails alone instead of rejecting the whole batch.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tac_import.importer.exceptions import PayloadError
from tac_import.world.defaults import DEFAULT_LIGHT_COLOR


class WallSegment(BaseModel):
    """A two-point wall in source-canvas units."""

    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    start_x: float = Field(..., alias="startX")
    start_y: float = Field(..., alias="startY")
    end_x: float = Field(..., alias="endX")
    end_y: float = Field(..., alias="endY")


class LightSource(BaseModel):
    """A point light in source-canvas units."""

    # NaN or infinite coordinates cannot be placed on a page
    model_config = ConfigDict(allow_inf_nan=False)

    x: float
    y: float
    radius: float = Field(..., ge=0, description="Light radius in source-canvas units")
    color: str = Field(default=DEFAULT_LIGHT_COLOR, description="Hex color, e.g. '#ffcc00'")


class SceneDescriptor(BaseModel):
    """One scene to reconcile against an existing page."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Page name, unique key")
    image_url: str | None = Field(
        default=None,
        alias="imageUrl",
        description="Background image placed on the map layer",
    )
    walls: list[WallSegment] = Field(default_factory=list)
    lights: list[LightSource] = Field(default_factory=list)


class NpcDescriptor(BaseModel):
    """One monster/NPC to import as a character."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, description="Character name, unique key")
    description: str = Field(default="", description="Free text stored on the sheet")
    image_url: str | None = Field(default=None, alias="imageUrl", description="Avatar URL")

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class NoteDescriptor(BaseModel):
    """One note to import as a handout."""

    name: str = Field(..., min_length=1, description="Handout name, unique key")
    description: str = Field(default="", description="Handout notes body")

    @field_validator("description", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class ImportBatch(BaseModel):
    """Top-level TAC export: scenes, monsters and notes, all optional.

    Items are kept raw here; see SceneDescriptor, NpcDescriptor and
    NoteDescriptor for per-item validation.
    """

    scenes: list[Any] = Field(default_factory=list)
    monsters: list[Any] = Field(default_factory=list)
    notes: list[Any] = Field(default_factory=list)

    @field_validator("scenes", "monsters", "notes", mode="before")
    @classmethod
    def _null_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_payload(cls, data: Any) -> "ImportBatch":
        """Build a batch from decoded JSON.

        Raises:
            PayloadError: If data is not an object or a collection is not a list.
        """
        if not isinstance(data, dict):
            raise PayloadError(f"expected a JSON object, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            fields = ", ".join(str(err["loc"][0]) for err in e.errors())
            raise PayloadError(f"expected lists for {fields}") from e


def item_name(raw: Any) -> str:
    """Best-effort name of a raw item for logging, before it is validated."""
    if isinstance(raw, dict):
        name = raw.get("name")
        if isinstance(name, str) and name:
            return name
    return "<unnamed>"
