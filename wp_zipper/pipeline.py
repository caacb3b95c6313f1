import os

from . import console
from .archive import archive
from .composer import check_installer, find_manifest, orphan_vendor, resolve_dependencies
from .errors import ConfigError
from .exclusions import IGNORE_FILE, build_exclusions, default_excludes
from .headers import check_header
from .staging import cleanup, stage, staging_name
from .tree_filter import ALWAYS_EXCLUDE

KINDS = ("plugin", "theme")

HEADER_WARNINGS = {
    "plugin": "Could not find a main plugin file with 'Plugin Name:' header in the current directory. "
              "Proceeding but please verify this is a valid plugin.",
    "theme": "Could not find 'style.css' with 'Theme Name:' header in the current directory. "
             "Proceeding but please verify this is a valid theme.",
}


def output_path_for(project_root, output_dir=None):
    if output_dir is None:
        output_dir = os.path.dirname(project_root)
    return os.path.join(os.path.abspath(output_dir), os.path.basename(project_root) + ".zip")


def always_excludes(project_root, output_path):
    # An archive written inside the project must not end up in the next one.
    always = list(ALWAYS_EXCLUDE)
    rel = os.path.relpath(output_path, project_root)
    if not rel.startswith(os.pardir):
        always.append(rel.replace(os.sep, "/"))
        always.append(rel.replace(os.sep, "/") + ".part")
    return always


def build(project_root, kind, output_dir=None, ignore_file=IGNORE_FILE, composer="composer",
          composer_timeout=None, pid=None):
    """Run the packaging steps for a confirmed project root.

    The staging directory is removed exactly once on every exit path. Returns
    a summary dict; raises a ZipperError subclass on any fatal condition.
    """
    if kind not in KINDS:
        raise ConfigError(f"Unknown project type '{kind}', expected one of: {', '.join(KINDS)}.")
    project_root = os.path.abspath(project_root)
    output_path = output_path_for(project_root, output_dir)
    ignore_path = os.path.join(project_root, ignore_file)
    staging_root = os.path.join(project_root, staging_name(pid))
    summary = {
        "type": kind,
        "project": project_root,
        "archive": output_path,
        "state": "confirmed",
        "staged": 0,
        "entries": 0,
        "composer": None,
    }

    console.info(f"Performing basic {kind} checks...")
    if not check_header(project_root, kind):
        console.warn(HEADER_WARNINGS[kind])

    manifest = find_manifest(project_root)
    if manifest:
        check_installer(composer)
    elif orphan_vendor(project_root):
        console.warn("A 'vendor' directory exists but no 'composer.json'. It will not be included in the ZIP. "
                     "If it contains necessary production code, you should include composer.json.")

    rules = build_exclusions(default_excludes(os.path.basename(ignore_file)), ignore_path)
    if os.path.isfile(ignore_path):
        console.info(f"Found '{ignore_file}'. Adding custom exclusions.")

    try:
        console.info(f"Creating temporary build directory: {staging_root}")
        console.info("Copying files to temporary build directory, excluding development files and ignore file items...")
        staged = stage(project_root, staging_root, rules, always_excludes(project_root, output_path))
        summary["staged"] = len(staged)
        summary["state"] = "staged"

        if manifest:
            console.info("Composer configuration found. Installing production dependencies in the build directory...")
            result = resolve_dependencies(staging_root, manifest, composer=composer, timeout=composer_timeout)
            summary["composer"] = {"rc": result["rc"]}
            console.info("Composer dependencies installed successfully.")
        summary["state"] = "dependencies_resolved"

        console.info(f"Creating production-ready ZIP file: {output_path}")
        names = archive(staging_root, output_path)
        summary["entries"] = len(names)
        summary["state"] = "archived"
    finally:
        if cleanup(staging_root):
            console.info(f"Cleaned up temporary build directory: {staging_root}")

    summary["state"] = "done"
    return summary
