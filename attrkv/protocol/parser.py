"""
Protocol Parser Module

This module handles parsing of raw shell lines and formatting of responses.
"""

from .commands import Command, CommandType, Response

PARAM_COUNT_ERROR = "Number of params is incorrect"


class ProtocolParser:
    """
    Parser for the attrkv line protocol.

    Protocol Format:
        Request:  <command> [ARGS...]\n
        Response: <message>\n

    Commands:
        put <key> <name> <value> [<name> <value> ...]  -> Put is done | Data Type Error
        get <key>                                      -> a: 1.0, b: true | No entry found for <key>
        delete <key>                                   -> Delete is done
        search <name> <value>                          -> k1,k2 | (empty line)
        keys                                           -> k1,k2 | (empty line)
        help                                           -> usage text
        exit                                           -> (shell ends)

    Tokens are separated by any run of whitespace, so keys, names and
    values cannot contain spaces. Command words are case-insensitive;
    everything else is case-sensitive.
    """

    _FIXED_ARITY = {
        "GET": (CommandType.GET, 2),
        "DELETE": (CommandType.DELETE, 2),
        "SEARCH": (CommandType.SEARCH, 3),
        "KEYS": (CommandType.KEYS, 1),
    }

    def parse_request(self, data: str) -> Command:
        """
        Parse a raw request line into a Command object.

        Args:
            data: Raw request string (may include trailing newline)

        Returns:
            Command object. Blank lines give type=EMPTY; unrecognised
            commands give type=UNKNOWN; recognised commands with the wrong
            number of arguments carry an ``error`` diagnostic.

        Examples:
            >>> parser = ProtocolParser()
            >>> cmd = parser.parse_request("put a x 1 y true")
            >>> cmd.type == CommandType.PUT
            True
            >>> cmd.pairs
            [('x', '1'), ('y', 'true')]
        """
        raw = data.strip()
        if not raw:
            return Command(type=CommandType.EMPTY, raw=raw)

        parts = raw.split()
        command_name = parts[0].upper()

        if command_name == "PUT":
            return self._parse_put(parts, raw)
        if command_name in self._FIXED_ARITY:
            return self._parse_fixed(parts, raw)
        if command_name == "HELP":
            return Command(type=CommandType.HELP, raw=raw)
        if command_name in ("EXIT", "QUIT"):
            return Command(type=CommandType.EXIT, raw=raw)

        return Command(
            type=CommandType.UNKNOWN,
            error=f"Unknown command: {parts[0]}. Type 'help' for usage",
            raw=raw,
        )

    def _parse_put(self, parts: list, raw: str) -> Command:
        """
        Parse a PUT command.

        Format: put <key> <name> <value> [<name> <value> ...]

        The line needs at least four tokens and an even count, so every
        attribute name has a value.
        """
        if len(parts) < 4 or len(parts) % 2 != 0:
            return Command(type=CommandType.PUT, error=PARAM_COUNT_ERROR, raw=raw)

        pairs = [(parts[i], parts[i + 1]) for i in range(2, len(parts), 2)]
        return Command(type=CommandType.PUT, key=parts[1], pairs=pairs, raw=raw)

    def _parse_fixed(self, parts: list, raw: str) -> Command:
        """Parse GET, DELETE, SEARCH and KEYS, which take a fixed token count."""
        command_type, arity = self._FIXED_ARITY[parts[0].upper()]
        if len(parts) != arity:
            return Command(type=command_type, error=PARAM_COUNT_ERROR, raw=raw)

        if command_type == CommandType.SEARCH:
            return Command(type=command_type, attribute=parts[1], value=parts[2], raw=raw)
        if command_type == CommandType.KEYS:
            return Command(type=command_type, raw=raw)
        return Command(type=command_type, key=parts[1], raw=raw)

    def format_response(self, response: Response) -> str:
        """
        Format a Response object into a protocol string.

        Args:
            response: Response object to format

        Returns:
            The response message WITH trailing newline. An empty message
            (no search hits, empty store) is a bare newline.

        Examples:
            >>> parser = ProtocolParser()
            >>> parser.format_response(Response.stored())
            'Put is done\\n'
            >>> parser.format_response(Response.keys_response([]))
            '\\n'
        """
        return f"{response.message}\n"
