"""
Command Shell Module

This module implements the line-oriented command loop for attrkv.

The shell reads one command per line from a text stream, executes it
against an AttributeStore and writes one response per command. It keeps
no data of its own beyond the store reference and a few counters.
"""

import logging
from typing import Optional, TextIO

from .config.settings import settings
from .protocol.commands import Command, CommandType, Response
from .protocol.parser import ProtocolParser
from .store.store import AttributeStore, DataTypeError

logger = logging.getLogger(__name__)


class AttributeShell:
    """
    Interactive shell over an AttributeStore.

    Usage:
        shell = AttributeShell(store=AttributeStore())
        shell.run(sys.stdin, sys.stdout)

    Attributes:
        store: The AttributeStore commands run against
        parser: The ProtocolParser for parsing commands
        banner: Whether to print the prompt line before reading
    """

    def __init__(
            self,
            store: AttributeStore = None,
            banner: bool = None,
            prompt: str = None,
    ):
        """
        Initialize the shell.

        Args:
            store: AttributeStore instance (creates new one if not provided)
            banner: Print the prompt line on start (default from settings)
            prompt: Prompt text (default from settings)
        """
        self.store = store if store is not None else AttributeStore()
        self.parser = ProtocolParser()
        self.banner = banner if banner is not None else settings.BANNER
        self.prompt = prompt if prompt is not None else settings.PROMPT

        self._total_commands = 0
        self._total_errors = 0

    def run(self, reader: TextIO, writer: TextIO) -> None:
        """
        Run the command loop until EOF or ``exit``.

        Args:
            reader: Text stream to read command lines from
            writer: Text stream to write responses to

        Protocol flow:
            1. Read a line
            2. Parse it with ProtocolParser
            3. Execute it on the store
            4. Write the formatted response
            5. Repeat until ``exit`` or end of input
        """
        if self.banner:
            writer.write(f"{self.prompt}\n")
            writer.flush()

        try:
            for line in reader:
                command = self.parser.parse_request(line)
                if command.type == CommandType.EXIT:
                    logger.debug("Exit requested")
                    break

                response = self.handle_command(command)
                if response is None:
                    continue

                writer.write(self.parser.format_response(response))
                writer.flush()
        except UnicodeDecodeError as exc:
            logger.error(f"Input is not valid text: {exc}")
        except BrokenPipeError:
            logger.debug("Output closed")

    def handle_line(self, line: str) -> Optional[Response]:
        """
        Parse and execute a single line.

        Returns:
            The Response to write, or None when nothing should be written
            (blank line or ``exit``)
        """
        return self.handle_command(self.parser.parse_request(line))

    def handle_command(self, command: Command) -> Optional[Response]:
        """Execute a parsed command, turning failures into error responses."""
        if command.type in (CommandType.EMPTY, CommandType.EXIT):
            return None

        if not command.is_valid:
            self._total_errors += 1
            logger.debug(f"Rejected line {command.raw!r}: {command.error}")
            return Response.error(command.error)

        self._total_commands += 1
        try:
            return self.execute(command)
        except DataTypeError as exc:
            self._total_errors += 1
            logger.warning(f"PUT {command.key} rejected: {exc}")
            return Response.data_type_error()
        except Exception as exc:  # Log unexpected errors but keep the shell alive
            self._total_errors += 1
            logger.exception(f"Error executing {command.raw!r}: {exc}")
            return Response.error("Internal error")

    def execute(self, command: Command) -> Response:
        """
        Execute a parsed command on the store.

        Args:
            command: A valid Command object

        Returns:
            Response object with the result

        Raises:
            DataTypeError: If a PUT conflicts with a locked attribute type
        """
        if command.type == CommandType.PUT:
            self.store.put(command.key, command.pairs)
            return Response.stored()

        if command.type == CommandType.GET:
            entry = self.store.get(command.key)
            if entry is None:
                return Response.key_not_found(command.key)
            return Response.entry_response(entry)

        if command.type == CommandType.DELETE:
            self.store.delete(command.key)
            return Response.deleted()

        if command.type == CommandType.SEARCH:
            return Response.keys_response(self.store.search(command.attribute, command.value))

        if command.type == CommandType.KEYS:
            return Response.keys_response(self.store.keys())

        if command.type == CommandType.HELP:
            return Response.help()

        return Response.error(f"Unsupported command: {command.type.name.lower()}")

    def get_stats(self) -> dict:
        """
        Get shell statistics.

        Returns:
            Dictionary with command and error counts plus store statistics.
        """
        return {
            "total_commands": self._total_commands,
            "total_errors": self._total_errors,
            "store_stats": self.store.get_stats(),
        }
