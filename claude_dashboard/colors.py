"""ANSI escape codes and percent-based colour selection."""

RESET = "\033[0m"
DIM = "\033[2m"
BOLD = "\033[1m"

RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
MAGENTA = "\033[35m"
CYAN = "\033[36m"
WHITE = "\033[37m"
BLACK = "\033[30m"
BG_WHITE = "\033[47m"


def color_for_percent(percent: float) -> str:
    """Green up to 50%, yellow up to 80%, red beyond."""
    if percent <= 50:
        return GREEN
    if percent <= 80:
        return YELLOW
    return RED


def colorize(text: str, color: str) -> str:
    return f"{color}{text}{RESET}"
