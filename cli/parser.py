"""Command parser for CLI input."""

import shlex

from cli.models import (
    CommandRequest,
    DeleteCommand,
    DownloadCommand,
    LinkCommand,
    ListCommand,
    RefreshCommand,
    SearchCommand,
    UploadCommand,
)


class ParseError(Exception):
    """Raised when command parsing fails."""

    pass


def parse_command(input_line: str) -> CommandRequest:
    """Parse user input into a CommandRequest object.

    Args:
        input_line: Raw user input from REPL

    Returns:
        CommandRequest object

    Raises:
        ParseError: If command syntax is invalid
    """
    if not input_line.strip():
        raise ParseError("Empty command")

    try:
        tokens = shlex.split(input_line)
    except ValueError as e:
        raise ParseError(f"Invalid syntax: {e}")

    if not tokens:
        raise ParseError("Empty command")

    command_name = tokens[0].lower()
    args = tokens[1:]

    if command_name == "list":
        return _parse_no_args(command_name, args, ListCommand)
    elif command_name == "refresh":
        return _parse_no_args(command_name, args, RefreshCommand)
    elif command_name == "search":
        return SearchCommand(query=" ".join(args))
    elif command_name == "upload":
        return _parse_upload(args)
    elif command_name == "delete":
        return DeleteCommand(record_id=_parse_single_id(command_name, args))
    elif command_name == "download":
        return _parse_download(args)
    elif command_name == "link":
        return LinkCommand(record_id=_parse_single_id(command_name, args))
    else:
        raise ParseError(f"Unknown command: {command_name}")


def _parse_no_args(command_name: str, args: list[str], command_type):
    if args:
        raise ParseError(f"{command_name} takes no arguments")
    return command_type()


def _parse_upload(args: list[str]) -> UploadCommand:
    """Parse 'upload <path> [path ...]' command."""
    if not args:
        raise ParseError("upload requires at least one file")
    return UploadCommand(file_list=tuple(args))


def _parse_single_id(command_name: str, args: list[str]) -> int:
    if len(args) != 1:
        raise ParseError(f"{command_name} requires exactly 1 argument: <id>")
    return _parse_id(args[0])


def _parse_id(token: str) -> int:
    try:
        record_id = int(token)
    except ValueError:
        raise ParseError(f"Invalid file id: {token}")
    if record_id < 0:
        raise ParseError(f"Invalid file id: {token}")
    return record_id


def _parse_download(args: list[str]) -> DownloadCommand:
    """Parse 'download <id> [output_path]' command."""
    if not 1 <= len(args) <= 2:
        raise ParseError("download requires 1 or 2 arguments: <id> [output_path]")

    record_id = _parse_id(args[0])
    output_path = args[1] if len(args) > 1 else None
    return DownloadCommand(record_id=record_id, output_path=output_path)
