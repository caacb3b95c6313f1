import os, sys

from .errors import UserAbort

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[0;33m"
CYAN = "\033[0;36m"
RESET = "\033[0m"


def use_color(stream) -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def emit(label, color, msg, stream=None):
    stream = stream or sys.stdout
    if use_color(stream):
        label = f"{color}{label}{RESET}"
    print(f"{label} {msg}", file=stream)


def info(msg):
    emit("INFO:", CYAN, msg)


def warn(msg):
    emit("WARNING:", YELLOW, msg)


def success(msg):
    emit("SUCCESS:", GREEN, msg)


def error(msg):
    emit("ERROR:", RED, msg, stream=sys.stderr)


def confirm(question, reader=input):
    # Only a single y/Y proceeds; EOF counts as "no".
    try:
        answer = reader(f"{question} (y/n): ")
    except EOFError:
        answer = ""
    if answer.strip() not in ("y", "Y"):
        raise UserAbort("Operation cancelled by user.")
