"""Batch import orchestrator for TAC exports.

Processes scenes, then monsters, then notes. Every item is imported on its
own: a failure is counted and logged, and the batch moves on.
"""

import logging
from typing import Any, Callable

from pydantic import ValidationError

from tac_import.chat.transport import ChatTransport
from tac_import.config import Settings, get_settings
from tac_import.database.models.enums import ObjectType
from tac_import.importer.exceptions import EntityCreationError
from tac_import.importer.results import ImportReport, ItemKind, ItemOutcome
from tac_import.importer.scene_reconciler import SceneReconciler
from tac_import.importer.upsert import EntityUpserter
from tac_import.schemas.import_batch import (
    ImportBatch,
    NoteDescriptor,
    NpcDescriptor,
    SceneDescriptor,
    item_name,
)
from tac_import.world.defaults import NPC_DESCRIPTION_ATTRIBUTE
from tac_import.world.repository import WorldRepository

logger = logging.getLogger(__name__)


class BatchImporter:
    """Imports a TAC batch into a world repository."""

    def __init__(
        self,
        repository: WorldRepository,
        transport: ChatTransport | None = None,
        settings: Settings | None = None,
    ) -> None:
        """Initialize the importer.

        Args:
            repository: World model to import into.
            transport: Where the final report is whispered. Optional so
                the importer can run without a chat channel.
            settings: Overrides the global settings.
        """
        self.repository = repository
        self.transport = transport
        self.settings = settings or get_settings()
        self.upserter = EntityUpserter(repository)
        self.scene_reconciler = SceneReconciler(repository, self.settings)

    def process_batch(self, batch: ImportBatch) -> ImportReport:
        """Import every item in the batch and report the counts.

        Args:
            batch: Parsed batch.

        Returns:
            ImportReport with per-kind counts and failure details.
        """
        report = ImportReport()

        steps: list[tuple[ItemKind, list[Any], Callable[[Any], ItemOutcome]]] = [
            (ItemKind.SCENE, batch.scenes, self._import_scene),
            (ItemKind.MONSTER, batch.monsters, self._import_npc),
            (ItemKind.NOTE, batch.notes, self._import_note),
        ]
        for kind, items, import_item in steps:
            for raw in items:
                report.record(kind, self._run_item(kind, raw, import_item))

        text = report.render()
        logger.info(text)
        details = report.render_failures()
        if self.transport is not None:
            self.transport.whisper(text)
            if details:
                self.transport.whisper(details)
        return report

    def _run_item(
        self,
        kind: ItemKind,
        raw: Any,
        import_item: Callable[[Any], ItemOutcome],
    ) -> ItemOutcome:
        """Run one item's import, converting any failure into an outcome."""
        try:
            return import_item(raw)
        except ValidationError as e:
            detail = f"Invalid {kind.value}: {e.error_count()} validation error(s)"
            logger.error(f"ROLL20 ERROR: Failed to create {kind.value}: {item_name(raw)}. Error: {detail}")
            return ItemOutcome.failure(item_name(raw), detail)
        except Exception as e:
            logger.error(f"ROLL20 ERROR: Failed to create {kind.value}: {item_name(raw)}. Error: {e}")
            return ItemOutcome.failure(item_name(raw), str(e))

    def _import_scene(self, raw: Any) -> ItemOutcome:
        scene = SceneDescriptor.model_validate(raw)
        return self.scene_reconciler.reconcile(scene)

    def _import_npc(self, raw: Any) -> ItemOutcome:
        npc = NpcDescriptor.model_validate(raw)
        return import_npc(self.upserter, npc)

    def _import_note(self, raw: Any) -> ItemOutcome:
        note = NoteDescriptor.model_validate(raw)
        return import_note(self.upserter, note)


def import_npc(upserter: EntityUpserter, npc: NpcDescriptor) -> ItemOutcome:
    """Replace any character with the NPC's name by a fresh one.

    The description goes in the npc_description attribute; the image, if
    any, becomes the avatar.
    """
    try:
        upserter.delete_by_name(ObjectType.CHARACTER, npc.name)
        logger.info(f"Importing NPC: {npc.name}")

        overrides = {"avatar": npc.image_url} if npc.image_url else {}
        character = upserter.create_character(npc.name, **overrides)
        upserter.create_attribute(character, NPC_DESCRIPTION_ATTRIBUTE, current=npc.description)
    except EntityCreationError as e:
        logger.error(f"ROLL20 ERROR: Failed to create NPC: {npc.name}. Error: {e}")
        return ItemOutcome.failure(npc.name, str(e))

    logger.info(f"NPC imported: {npc.name}")
    return ItemOutcome.success(npc.name)


def import_note(upserter: EntityUpserter, note: NoteDescriptor) -> ItemOutcome:
    """Replace any handout with the note's name by a fresh one."""
    try:
        upserter.delete_by_name(ObjectType.HANDOUT, note.name)
        logger.info(f"Importing note: {note.name}")
        upserter.create_handout(note.name, notes=note.description)
    except EntityCreationError as e:
        logger.error(f"ROLL20 ERROR: Failed to create Note: {note.name}. Error: {e}")
        return ItemOutcome.failure(note.name, str(e))

    logger.info(f"Note imported: {note.name}")
    return ItemOutcome.success(note.name)
