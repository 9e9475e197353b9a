"""Read-only dump of every character and its attributes."""

import logging
from dataclasses import dataclass, field
from typing import Any

from tac_import.chat.transport import ChatTransport
from tac_import.database.models.enums import ObjectType
from tac_import.world.repository import WorldRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttributeDump:
    name: str
    current: Any
    max: Any


@dataclass
class CharacterDump:
    name: str
    character_id: Any
    attributes: list[AttributeDump] = field(default_factory=list)
    error: str | None = None


async def dump_all_characters(
    repository: WorldRepository,
    transport: ChatTransport | None = None,
) -> list[CharacterDump]:
    """Log every character's attributes as raw name/current/max values.

    Attributes are resolved one at a time, in order, so the log reads in
    the same order the characters were enumerated. A character whose
    attributes cannot be read is logged and skipped.

    Args:
        repository: World model to inspect.
        transport: If given, receives a one-line summary.

    Returns:
        One CharacterDump per character.
    """
    dumps: list[CharacterDump] = []
    characters = repository.find_all(ObjectType.CHARACTER)
    logger.info(f"Dumping {len(characters)} characters")

    for character in characters:
        dump = CharacterDump(name=character.get("name"), character_id=character.id)
        try:
            logger.info(f"Character: {dump.name} (id {dump.character_id})")
            for attribute in repository.find_attributes_of_character(character.id):
                current, maximum = await repository.resolve_attribute(attribute)
                entry = AttributeDump(name=attribute.get("name"), current=current, max=maximum)
                dump.attributes.append(entry)
                logger.info(f"  {entry.name}: current={entry.current!r} max={entry.max!r}")
        except Exception as e:
            dump.error = str(e)
            logger.error(f"Failed to dump character {dump.name}: {e}")
        dumps.append(dump)

    attribute_count = sum(len(d.attributes) for d in dumps)
    summary = f"Dumped {len(dumps)} characters, {attribute_count} attributes. See the log for values."
    if transport is not None:
        transport.whisper(summary)
    return dumps
