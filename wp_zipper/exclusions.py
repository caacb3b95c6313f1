import os

IGNORE_FILE = ".zipperignore"

# vendor/ and the composer files are handled by the dependency step, see tree_filter.ALWAYS_EXCLUDE.
DEFAULT_EXCLUDES = [
    ".git", ".gitignore", ".vscode", "node_modules", "package.json", "package-lock.json", "yarn.lock",
    "tests", "bin", "webpack.config.js", "gulpfile.js",
    "*.log",
]


def default_excludes(ignore_name=IGNORE_FILE):
    return DEFAULT_EXCLUDES + [ignore_name]


def parse_ignore_line(line):
    """Turn one .zipperignore line into a pattern, or None for blanks and comments.

    A leading "/" or "./" is dropped (root-relative, not absolute) and a trailing "/"
    gets a "*" appended so the directory and everything below it is excluded.
    """
    line = line.strip()
    if not line or line.startswith("#"):
        return None
    if line.startswith("./"):
        line = line[2:]
    elif line.startswith("/"):
        line = line[1:]
    if line.endswith("/"):
        line += "*"
    return line


def read_ignore_file(path):
    if not path or not os.path.isfile(path):
        return []
    patterns = []
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        for raw in f:
            pat = parse_ignore_line(raw)
            if pat is not None:
                patterns.append(pat)
    return patterns


def build_exclusions(builtins, ignore_file=None):
    rules = list(builtins)
    rules.extend(read_ignore_file(ignore_file))
    return rules
