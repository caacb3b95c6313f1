import os, sys, json, argparse, time

from . import console
from .errors import ConfigError, ZipperError
from .exclusions import IGNORE_FILE
from .pipeline import build

VERBS = {
    "zipplugin": "plugin",
    "ziptheme": "theme",
}


def resolve_kind(prog):
    name = os.path.basename(prog or "")
    if name.endswith(".exe"):
        name = name[:-4]
    if name not in VERBS:
        raise ConfigError(
            f"This tool must be executed as 'zipplugin' or 'ziptheme'. Current script name: '{name}'."
        )
    return VERBS[name]


def parse_args(prog, argv):
    ap = argparse.ArgumentParser(prog=prog, description="Create a production-ready ZIP of a WordPress plugin or theme.")
    ap.add_argument("--project-root", default=os.getcwd())
    ap.add_argument("--output-dir", default=None, help="defaults to the parent of the project root")
    ap.add_argument("--ignore-file", default=IGNORE_FILE)
    ap.add_argument("--composer", default=os.environ.get("WP_ZIPPER_COMPOSER", "composer"))
    ap.add_argument("--composer-timeout", type=float, default=None)
    ap.add_argument("-y", "--yes", action="store_true", help="skip the confirmation prompt")
    ap.add_argument("--report", default="", help="write a JSON summary of the run to this path")
    return ap.parse_args(argv)


def write_report(path, data):
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
        f.write("\n")


def main(argv=None, prog=None, reader=input):
    prog = prog or sys.argv[0]
    argv = sys.argv[1:] if argv is None else argv
    try:
        kind = resolve_kind(prog)
    except ConfigError as e:
        console.error(str(e))
        return 1

    try:
        args = parse_args(os.path.basename(prog), argv)
    except SystemExit as e:
        # argparse exits 2 on bad options; every fatal error here is 1.
        return 0 if e.code in (0, None) else 1
    root = os.path.abspath(args.project_root)
    report = {"timestamp": int(time.time()), "type": kind, "project": root, "pass": False}

    console.info(f"Detected operation: Zipping a WordPress {kind}.")
    try:
        if not os.path.isdir(root):
            raise ConfigError(f"Project root '{root}' is not a directory.")
        if not args.yes:
            console.confirm(
                f"Is the current directory ('{os.path.basename(root)}') the root of your WordPress {kind}?",
                reader=reader,
            )
        report.update(build(
            root,
            kind,
            output_dir=args.output_dir,
            ignore_file=args.ignore_file,
            composer=args.composer,
            composer_timeout=args.composer_timeout,
        ))
        report["pass"] = True
    except ZipperError as e:
        report["error"] = str(e)
        report["error_type"] = type(e).__name__
        console.error(str(e))
        return 1
    finally:
        if args.report:
            write_report(args.report, report)

    console.success(f"Successfully created {kind} ZIP: {report['archive']}")
    return 0
