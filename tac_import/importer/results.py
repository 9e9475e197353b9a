"""Outcome and report types for batch imports."""

from dataclasses import dataclass, field
from enum import Enum


class ItemKind(str, Enum):
    """Collections of an import batch, in processing order."""

    SCENE = "scene"
    MONSTER = "monster"
    NOTE = "note"


@dataclass(frozen=True)
class ItemOutcome:
    """Result of importing one item: ok, or failed with a detail message."""

    ok: bool
    name: str
    detail: str = ""

    @classmethod
    def success(cls, name: str) -> "ItemOutcome":
        return cls(ok=True, name=name)

    @classmethod
    def failure(cls, name: str, detail: str) -> "ItemOutcome":
        return cls(ok=False, name=name, detail=detail)


@dataclass
class KindTally:
    """Success/failure counts for one kind."""

    success: int = 0
    failure: int = 0

    def record(self, outcome: ItemOutcome) -> None:
        if outcome.ok:
            self.success += 1
        else:
            self.failure += 1

    @property
    def total(self) -> int:
        return self.success + self.failure


@dataclass(frozen=True)
class FailureDetail:
    """One failed item, kept for display."""

    kind: ItemKind
    name: str
    detail: str


@dataclass
class ImportReport:
    """Aggregated outcome of one batch."""

    scenes: KindTally = field(default_factory=KindTally)
    monsters: KindTally = field(default_factory=KindTally)
    notes: KindTally = field(default_factory=KindTally)
    failures: list[FailureDetail] = field(default_factory=list)

    def tally(self, kind: ItemKind) -> KindTally:
        return {
            ItemKind.SCENE: self.scenes,
            ItemKind.MONSTER: self.monsters,
            ItemKind.NOTE: self.notes,
        }[kind]

    def record(self, kind: ItemKind, outcome: ItemOutcome) -> None:
        """Count one item; a failure is also kept with its detail."""
        self.tally(kind).record(outcome)
        if not outcome.ok:
            self.failures.append(FailureDetail(kind=kind, name=outcome.name, detail=outcome.detail))

    @property
    def has_failures(self) -> bool:
        return bool(self.failures)

    def render(self) -> str:
        """Render the multi-line summary sent back to the GM."""
        return (
            "TAC Import Complete.\n"
            f"Scenes: {self.scenes.success} configured, {self.scenes.failure} failed.\n"
            f"Monsters: {self.monsters.success} imported, {self.monsters.failure} failed.\n"
            f"Notes: {self.notes.success} imported, {self.notes.failure} failed."
        )

    def render_failures(self) -> str | None:
        """Render one line per failed item, or None if nothing failed."""
        if not self.failures:
            return None
        return "\n".join(
            f"{failure.kind.value.capitalize()} {failure.name} failed: {failure.detail}"
            for failure in self.failures
        )
