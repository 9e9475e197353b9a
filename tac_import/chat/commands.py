"""Chat command parsing and dispatch.

Command lines look like:

    !tac --help
    !tac --dump
    !tac --import {"scenes": [...], "monsters": [...], "notes": [...]}

The first "--" token names the sub-command and everything after it is the
payload, taken verbatim. A JSON payload that itself contains " --import"
is therefore never split.
"""

import asyncio
import json
import logging
import re
from dataclasses import dataclass

from tac_import.chat.transport import ChatTransport
from tac_import.config import Settings, get_settings
from tac_import.importer.batch_importer import BatchImporter
from tac_import.importer.diagnostics import dump_all_characters
from tac_import.importer.exceptions import PayloadError
from tac_import.importer.results import ImportReport
from tac_import.schemas.import_batch import ImportBatch
from tac_import.world.repository import WorldRepository

logger = logging.getLogger(__name__)


HELP_TEXT = "Use --import {json} to import TAC data. Use --dump to list character attributes."
INVALID_JSON_TEXT = "Error: Invalid JSON provided."
MISSING_PAYLOAD_TEXT = "Provide a valid JSON string for import."

API_MESSAGE_TYPE = "api"

# "!prefix" then, optionally, whitespace and the rest of the line
_ADDRESS_PATTERN = re.compile(r"^!(?P<prefix>\S+)(?:\s+(?P<rest>.*))?$", re.DOTALL)
# "--sub" then the payload; the sub-command is a run of word characters
_FLAG_PATTERN = re.compile(r"^--(?P<sub>[\w-]*)\s*(?P<payload>.*)$", re.DOTALL)


@dataclass(frozen=True)
class ChatMessage:
    """Inbound chat message from the host."""

    content: str
    type: str = API_MESSAGE_TYPE
    who: str = ""


@dataclass(frozen=True)
class ParsedCommand:
    """A command line addressed to us.

    Attributes:
        sub_command: Name after "--", or the bare first token when the line
            has no flag. Empty when nothing follows the prefix.
        payload: Text after the sub-command, or None if there is none.
        flagged: Whether the sub-command was written as a "--" flag.
    """

    sub_command: str
    payload: str | None = None
    flagged: bool = True


def parse_command(text: str, prefix: str) -> ParsedCommand | None:
    """Parse a chat line addressed to prefix.

    Args:
        text: Raw chat line.
        prefix: Command prefix without the "!".

    Returns:
        ParsedCommand, or None if the line is not addressed to prefix.

    Examples:
        >>> parse_command("!tac --help", "tac")
        ParsedCommand(sub_command='help', payload=None, flagged=True)
        >>> parse_command("!other --help", "tac") is None
        True
    """
    address = _ADDRESS_PATTERN.match(text.strip())
    if not address or address.group("prefix") != prefix:
        return None

    rest = (address.group("rest") or "").strip()
    if not rest:
        return ParsedCommand(sub_command="", flagged=False)

    flag = _FLAG_PATTERN.match(rest)
    if not flag:
        return ParsedCommand(sub_command=rest.split()[0], flagged=False)

    payload = (flag.group("payload") or "").strip()
    return ParsedCommand(sub_command=flag.group("sub"), payload=payload or None)


class CommandHandler:
    """Dispatches chat commands to the importer and the diagnostic dump."""

    def __init__(
        self,
        repository: WorldRepository,
        transport: ChatTransport,
        settings: Settings | None = None,
    ) -> None:
        self.repository = repository
        self.transport = transport
        self.settings = settings or get_settings()

    def handle_message(self, message: ChatMessage) -> bool:
        """Handle one inbound message.

        Returns:
            False if the message was not for us and was ignored.
        """
        if message.type != API_MESSAGE_TYPE:
            return False
        command = parse_command(message.content, self.settings.command_prefix)
        if command is None:
            return False
        self.dispatch(command)
        return True

    def handle_text(self, text: str) -> bool:
        """Handle a raw API command line."""
        return self.handle_message(ChatMessage(content=text))

    def dispatch(self, command: ParsedCommand) -> None:
        if command.flagged and command.sub_command == "help":
            logger.info("Help command invoked.")
            self.transport.whisper(HELP_TEXT)
        elif command.flagged and command.sub_command == "dump":
            logger.info("Dump command invoked.")
            asyncio.run(dump_all_characters(self.repository, self.transport))
        elif command.flagged and command.sub_command == "import":
            self.run_import(command.payload)
        else:
            logger.info(f"Unknown sub-command: {command.sub_command}")
            self.transport.whisper(f"Unknown sub-command: {command.sub_command}")

    def run_import(self, payload: str | None) -> ImportReport | None:
        """Parse an import payload and run the batch.

        Returns:
            The report, or None if the payload was missing or invalid (in
            which case nothing in the world was touched).
        """
        if not payload:
            logger.info("Import command requires a JSON string parameter.")
            self.transport.whisper(MISSING_PAYLOAD_TEXT)
            return None

        try:
            data = json.loads(payload)
        except json.JSONDecodeError as e:
            logger.error(f"Error parsing JSON: {e}")
            self.transport.whisper(INVALID_JSON_TEXT)
            return None

        try:
            batch = ImportBatch.from_payload(data)
        except PayloadError as e:
            logger.error(f"Invalid import payload: {e}")
            self.transport.whisper(f"Error: Invalid import payload: {e}.")
            return None

        importer = BatchImporter(self.repository, self.transport, self.settings)
        return importer.process_batch(batch)
