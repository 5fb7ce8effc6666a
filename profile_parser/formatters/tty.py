"""
ANSI color helpers for terminal output.
"""

# ANSI color codes
COLOR_CODES = {
    'green': 32,
    'yellow': 33,
}


def colorize(color: str, text: str, enable: bool) -> str:
    """Wrap text in ANSI escape codes when enable is True."""
    if not enable:
        return text
    return f"\033[{COLOR_CODES[color]}m{text}\033[0m"


def green(text: str, enable: bool) -> str:
    return colorize('green', text, enable)


def yellow(text: str, enable: bool) -> str:
    return colorize('yellow', text, enable)
