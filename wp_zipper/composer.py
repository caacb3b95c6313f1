import os, shutil, subprocess

from .errors import CopyError, DependencyInstallError, DependencyToolMissing

MANIFEST = "composer.json"
LOCKFILE = "composer.lock"
VENDOR_DIR = "vendor"

INSTALL_ARGS = ["install", "--no-dev", "--optimize-autoloader", "--no-interaction"]


def run(cmd, cwd, timeout=None):
    p = subprocess.run(cmd, cwd=cwd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True, timeout=timeout)
    return p.returncode, p.stdout


def find_manifest(root):
    path = os.path.join(root, MANIFEST)
    return path if os.path.isfile(path) else None


def orphan_vendor(root):
    return find_manifest(root) is None and os.path.isdir(os.path.join(root, VENDOR_DIR))


def check_installer(composer="composer"):
    found = shutil.which(composer)
    if not found:
        raise DependencyToolMissing(
            f"Composer ('{composer}') is not found but '{MANIFEST}' exists. "
            "Please install Composer globally or ensure it's in your PATH."
        )
    return found


def copy_manifest(manifest, staging_root):
    srcs = [manifest]
    lock = os.path.join(os.path.dirname(manifest), LOCKFILE)
    if os.path.isfile(lock):
        srcs.append(lock)

    copied = []
    for src in srcs:
        try:
            shutil.copy2(src, os.path.join(staging_root, os.path.basename(src)))
        except OSError as e:
            raise CopyError(os.path.basename(src), str(e)) from e
        copied.append(os.path.basename(src))
    return copied


def resolve_dependencies(staging_root, manifest, composer="composer", timeout=None, runner=run):
    """Install production-only dependencies into staging_root/vendor.

    The source tree's vendor/ is never used: it may hold dev packages. Returns
    None when there is no manifest, else {"rc": ..., "output": ...}.
    """
    if manifest is None:
        return None
    copy_manifest(manifest, staging_root)

    cmd = [composer] + INSTALL_ARGS
    try:
        rc, out = runner(cmd, cwd=staging_root, timeout=timeout)
    except subprocess.TimeoutExpired as e:
        out = e.output or ""
        if isinstance(out, bytes):
            out = out.decode("utf-8", errors="ignore")
        raise DependencyInstallError(-1, out + f"\nTimed out after {timeout}s.") from e
    except OSError as e:
        raise DependencyInstallError(-1, str(e)) from e
    if rc != 0:
        raise DependencyInstallError(rc, out or "")
    return {"rc": rc, "output": out}
