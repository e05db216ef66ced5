"""CLI constants and configuration."""

from prompt_toolkit.styles import Style

COMMANDS = ["list", "refresh", "search", "upload", "delete", "download", "link", "clear", "exit", "help"]

STYLE = Style.from_dict(
    {
        "prompt": "#2F80ED bold",
        "command": "#0088ff bold",
    }
)

BLUE = "\033[38;2;47;128;237m"
GREEN = "\033[32m"
DIM = "\033[2m"
RESET = "\033[0m"

LOGO = f"""{BLUE}
 ██╗   ██╗ █████╗ ██╗   ██╗██╗  ████████╗
 ██║   ██║██╔══██╗██║   ██║██║  ╚══██╔══╝
 ██║   ██║███████║██║   ██║██║     ██║
 ╚██╗ ██╔╝██╔══██║██║   ██║██║     ██║
  ╚████╔╝ ██║  ██║╚██████╔╝███████╗██║
   ╚═══╝  ╚═╝  ╚═╝ ╚═════╝ ╚══════╝╚═╝
{RESET}"""

WELCOME_TITLE = "File Vault - Upload, search, and manage your files with ease."
WELCOME_HELP = "Type 'help' for commands or 'exit' to quit.\n"

PROMPT_TEXT = "vault> "

CONFIRM_DELETE_TEXT = "Are you sure you want to delete {name}? (y/N) "

EMPTY_LIST_TEXT = "No files found."

HELP_TEXT = """Available commands:
  list                                List files matching the current search
  refresh                             Reload the file list from the server
  search [query]                      Filter files by name (no query clears the search)
  upload <path> [path ...]            Upload one or more files concurrently
  delete <id>                         Delete a file (asks for confirmation)
  download <id> [output_path]         Download a file (defaults to the download directory)
  link <id>                           Show the download link of a file
  clear                               Clear screen and redisplay welcome message
  help                                Show this help
  exit                                Exit REPL

Examples:
  upload report.pdf photos/holiday.png
  search report
  delete 12
  download 12 downloads/report-copy.pdf"""
