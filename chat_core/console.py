import sys
from importlib.metadata import version, PackageNotFoundError


DIST_NAME = 'ollama-term-chat'

LOGO = r"""
  ___  _ _                         ____ _           _
 / _ \| | | __ _ _ __ ___   __ _  / ___| |__   __ _| |_
| | | | | |/ _` | '_ ` _ \ / _` || |   | '_ \ / _` | __|
| |_| | | | (_| | | | | | | (_| || |___| | | | (_| | |_
 \___/|_|_|\__,_|_| |_| |_|\__,_| \____|_| |_|\__,_|\__|
"""


class Colors:
    BLUE = '\033[94m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    CYAN = '\033[96m'
    GRAY = '\033[90m'
    RESET = '\033[0m'
    BOLD = '\033[1m'


def print_colored(text: str, color: str = Colors.RESET) -> None:
    print(f"{color}{text}{Colors.RESET}")


def write_token(text: str) -> None:
    """Write a streamed token as-is and flush so it shows up immediately."""
    sys.stdout.write(text)
    sys.stdout.flush()


def read_line(prompt: str, color: str = Colors.RESET) -> str:
    """Prompt for one line of input. EOFError propagates when stdin closes."""
    return input(f"{color}{prompt}{Colors.RESET}")


def get_version() -> str:
    try:
        return version(DIST_NAME)
    except PackageNotFoundError:
        return 'dev'


def print_banner() -> None:
    print_colored(LOGO, Colors.CYAN)
    print_colored(f"v{get_version()}\n", Colors.GRAY)
