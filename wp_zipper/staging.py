import os, shutil, stat

from . import console
from .errors import CopyError, SetupError
from .tree_filter import ALWAYS_EXCLUDE, STAGING_PREFIX, walk


def staging_name(pid=None):
    return f"{STAGING_PREFIX}-{os.getpid() if pid is None else pid}"


def create_staging(path):
    try:
        if os.path.isdir(path) and not os.path.islink(path):
            remove_tree(path)
        os.makedirs(path)
    except OSError as e:
        raise SetupError(f"Failed to create temporary build directory '{path}': {e}") from e
    return path


def copy_entry(entry, dest_root):
    dst = os.path.join(dest_root, *entry.rel.split("/"))
    try:
        if entry.kind == "dir":
            os.makedirs(dst, exist_ok=True)
        elif entry.kind == "link":
            os.symlink(os.readlink(entry.path), dst)
        else:
            shutil.copy2(entry.path, dst)
    except OSError as e:
        raise CopyError(entry.rel, str(e)) from e
    return dst


def stage(project_root, staging_root, rules, always=ALWAYS_EXCLUDE):
    create_staging(staging_root)
    staged = []
    dirs = []
    for entry in walk(project_root, rules, always):
        dst = copy_entry(entry, staging_root)
        if entry.kind == "dir":
            dirs.append((entry, dst))
        staged.append(entry.rel)

    # Directory modes last, a read-only source dir must not block copying its contents.
    for entry, dst in reversed(dirs):
        try:
            shutil.copystat(entry.path, dst)
        except OSError as e:
            raise CopyError(entry.rel, str(e)) from e
    return staged


def _make_writable(path):
    os.chmod(path, os.lstat(path).st_mode | stat.S_IRWXU)


def remove_tree(path):
    # Staged dirs carry the source modes; a read-only one would block rmtree.
    if os.path.islink(path) or not os.path.isdir(path):
        os.remove(path)
        return
    _make_writable(path)
    for dirpath, dirnames, _ in os.walk(path):
        for name in dirnames:
            sub = os.path.join(dirpath, name)
            if not os.path.islink(sub):
                _make_writable(sub)
    shutil.rmtree(path)


def cleanup(staging_root):
    """Remove the staging root; True when something was removed.

    A failed removal is reported as a warning and returns False.
    """
    if not os.path.lexists(staging_root):
        return False
    try:
        remove_tree(staging_root)
    except OSError as e:
        console.warn(f"Could not remove temporary build directory '{staging_root}': {e}")
    return not os.path.lexists(staging_root)
