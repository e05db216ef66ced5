"""Custom completer for the vault CLI."""

from pathlib import Path
from typing import Iterable, Optional

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from cli.constants import COMMANDS
from vault.store import FileRecordStore

ID_COMMANDS = ("delete", "download", "link")


class VaultCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Local file path completion for the 'upload' command
    - Record id completion for 'delete', 'download' and 'link'
    """

    def __init__(self, store: Optional[FileRecordStore] = None, base_dir: Optional[Path] = None):
        self.store = store
        self.base_dir = base_dir

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        current_word = "" if is_typing_new_token else tokens[-1]

        if command == "upload":
            already_typed = set(tokens[1:])
            if not is_typing_new_token:
                already_typed.discard(current_word)
            yield from self._complete_paths(current_word, already_typed)
        elif command in ID_COMMANDS:
            args_before = len(tokens) - 1 if is_typing_new_token else len(tokens) - 2
            if args_before == 0:
                yield from self._complete_ids(current_word)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_paths(self, partial: str, exclude: set) -> Iterable[Completion]:
        """Complete regular files and directories relative to the base directory."""
        base = self.base_dir or Path.cwd()
        head, _, prefix = partial.rpartition("/")
        directory = base / head if head else base

        if not directory.is_dir():
            return

        for item in sorted(directory.iterdir()):
            if item.name.startswith(".") and not prefix.startswith("."):
                continue
            if not item.name.lower().startswith(prefix.lower()):
                continue
            rel_path = f"{head}/{item.name}" if head else item.name
            if item.is_dir():
                yield Completion(rel_path + "/", start_position=-len(partial))
            elif item.is_file() and rel_path not in exclude:
                yield Completion(rel_path, start_position=-len(partial))

    def _complete_ids(self, partial: str) -> Iterable[Completion]:
        """Complete record ids from the current store snapshot."""
        if self.store is None:
            return
        for record in self.store.get_all():
            record_id = str(record.id)
            if record_id.startswith(partial):
                yield Completion(record_id, start_position=-len(partial), display_meta=record.filename)
