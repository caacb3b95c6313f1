import os, stat, zipfile

from .errors import ArchiveError


def iter_tree(root):
    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = os.path.relpath(dirpath, root)
        prefix = "" if rel_dir == "." else rel_dir.replace(os.sep, "/") + "/"
        dirnames.sort()
        links = [d for d in dirnames if os.path.islink(os.path.join(dirpath, d))]
        for name in dirnames:
            if name not in links:
                yield prefix + name + "/", os.path.join(dirpath, name)
        for name in sorted(filenames + links):
            yield prefix + name, os.path.join(dirpath, name)


def _write_link(z, path, arcname):
    info = zipfile.ZipInfo(arcname)
    info.create_system = 3
    info.external_attr = (stat.S_IFLNK | 0o777) << 16
    z.writestr(info, os.readlink(path))


def archive(staging_root, output_path):
    """Zip everything under staging_root with names relative to it.

    The archive is written next to output_path and moved into place only once
    complete, so a failure never leaves a half-written zip behind.
    """
    output_path = os.path.abspath(output_path)
    out_dir = os.path.dirname(output_path)
    tmp_path = output_path + ".part"
    names = []
    try:
        os.makedirs(out_dir, exist_ok=True)
        with zipfile.ZipFile(tmp_path, "w", compression=zipfile.ZIP_DEFLATED) as z:
            for arcname, path in iter_tree(staging_root):
                if os.path.islink(path):
                    _write_link(z, path, arcname)
                else:
                    z.write(path, arcname=arcname)
                names.append(arcname)
        os.replace(tmp_path, output_path)
    except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise ArchiveError(f"Failed to create ZIP archive '{output_path}': {e}") from e
    return names
