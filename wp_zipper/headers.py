import os, re

PLUGIN_HEADER_RE = re.compile(r'^[\s/*#@]*Plugin\s+Name\s*:\s*(.+)$', re.IGNORECASE | re.MULTILINE)
THEME_HEADER_RE = re.compile(r'^[\s/*#@]*Theme\s+Name\s*:\s*(.+)$', re.IGNORECASE | re.MULTILINE)

# WordPress itself only reads the first 8 KiB of a file for headers.
HEADER_BYTES = 8192


def read_head(path):
    try:
        with open(path, "r", encoding="utf-8", errors="ignore") as f:
            return f.read(HEADER_BYTES)
    except OSError:
        return ""


def find_main_plugin(root: str) -> str:
    # Only top-level files count, WordPress does not look deeper for the main file.
    for fn in sorted(os.listdir(root)):
        if not fn.lower().endswith(".php"):
            continue
        path = os.path.join(root, fn)
        if os.path.isfile(path) and PLUGIN_HEADER_RE.search(read_head(path)):
            return fn
    return ""


def has_theme_header(root: str) -> bool:
    path = os.path.join(root, "style.css")
    return os.path.isfile(path) and THEME_HEADER_RE.search(read_head(path)) is not None


def check_header(root, kind):
    if kind == "plugin":
        return bool(find_main_plugin(root))
    if kind == "theme":
        return has_theme_header(root)
    return False
