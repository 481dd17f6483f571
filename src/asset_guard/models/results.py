"""Result models returned by the dispatcher and editability resolver.

All models use Pydantic v2 BaseModel with frozen=True for immutability.
"""

from pydantic import BaseModel, ConfigDict, Field


class EditCheck(BaseModel):
    """Editability verdict for a single asset path."""

    model_config = ConfigDict(frozen=True)

    editable: bool = Field(..., description="Whether the path may be modified now")
    reason: str = Field(default="", description="Why the path is not editable, if known")

    def __bool__(self) -> bool:
        return self.editable


class SaveOutcome(BaseModel):
    """Partition of a save request into assets to write and assets to revert."""

    model_config = ConfigDict(frozen=True)

    saved: tuple[str, ...] = Field(default=(), description="Assets that should be written")
    reverted: tuple[str, ...] = Field(default=(), description="Assets that should be reverted")
