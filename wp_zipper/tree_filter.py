import os
from collections import namedtuple
from fnmatch import fnmatchcase

from .errors import CopyError

STAGING_PREFIX = ".wp_build_temp"

# Never copied from the source tree: the composer files are re-added and vendor/
# regenerated by the dependency step, and staging dirs (ours or stale) are build output.
ALWAYS_EXCLUDE = ("composer.json", "composer.lock", "vendor", STAGING_PREFIX + "*")

Entry = namedtuple("Entry", "rel path kind")


def split_rel(rel):
    return [p for p in rel.replace("\\", "/").split("/") if p and p != "."]


def _window_at(parts, pat_parts, i):
    for j, pat in enumerate(pat_parts):
        if not fnmatchcase(parts[i + j], pat):
            return False
    return True


def matches(parts, is_dir, pattern):
    """Match one pattern against the segments of a relative path.

    Patterns are compared segment by segment, at any offset, so "*" never
    crosses a "/". The directory form "foo/*" matches the directory foo
    itself and everything beneath it, but not a sibling like foobar.
    """
    if not pattern:
        return False
    if pattern.endswith("/*"):
        base = pattern[:-2].split("/")
        for i in range(len(parts) - len(base) + 1):
            if not _window_at(parts, base, i):
                continue
            if i + len(base) < len(parts) or is_dir:
                return True
        return False
    pat_parts = pattern.split("/")
    for i in range(len(parts) - len(pat_parts) + 1):
        if _window_at(parts, pat_parts, i):
            return True
    return False


def should_include(rel, rules, is_dir=False, always=ALWAYS_EXCLUDE):
    parts = split_rel(rel)
    if not parts:
        return True
    for pattern in always:
        if matches(parts, is_dir, pattern):
            return False
    for pattern in rules:
        if matches(parts, is_dir, pattern):
            return False
    return True


def walk(root, rules, always=ALWAYS_EXCLUDE):
    """Yield Entry tuples for everything under root that survives the rules.

    Excluded directories are pruned. Symlinks are reported as "link" entries
    and never followed.
    """
    root = os.path.abspath(root)

    def _unreadable(err):
        raise CopyError(os.path.relpath(err.filename or root, root), err.strerror or str(err))

    for dirpath, dirnames, filenames in os.walk(root, onerror=_unreadable):
        rel_dir = os.path.relpath(dirpath, root)
        prefix = "" if rel_dir == "." else rel_dir.replace(os.sep, "/") + "/"

        keep = []
        for name in sorted(dirnames):
            full = os.path.join(dirpath, name)
            rel = prefix + name
            if not should_include(rel, rules, True, always):
                continue
            if os.path.islink(full):
                yield Entry(rel, full, "link")
                continue
            yield Entry(rel, full, "dir")
            keep.append(name)
        dirnames[:] = keep

        for name in sorted(filenames):
            full = os.path.join(dirpath, name)
            rel = prefix + name
            if not should_include(rel, rules, False, always):
                continue
            yield Entry(rel, full, "link" if os.path.islink(full) else "file")
