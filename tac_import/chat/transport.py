"""Chat transport: where replies to chat commands go."""

from typing import Protocol

from rich.console import Console
from rich.markup import escape

from tac_import.config import get_settings


class ChatTransport(Protocol):
    """Outbound side of the chat channel."""

    def whisper(self, text: str) -> None:
        """Send a private message to the GM."""
        ...


def whisper_command(target: str, text: str) -> str:
    """Format a whisper the way the host's chat expects it."""
    return f"/w {target} {text}"


class ConsoleTransport:
    """Prints whispers to a rich console."""

    def __init__(
        self,
        console: Console | None = None,
        sender: str | None = None,
        target: str | None = None,
    ) -> None:
        settings = get_settings()
        self.console = console or Console()
        self.sender = sender or settings.sender_name
        self.target = target or settings.whisper_target

    def whisper(self, text: str) -> None:
        self.console.print(f"[dim]({escape(self.sender)})[/dim] {escape(whisper_command(self.target, text))}")
