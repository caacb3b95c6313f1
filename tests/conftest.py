import os, stat

import pytest

FAKE_COMPOSER_OK = """#!/bin/sh
test -f composer.json || { echo "composer.json missing" >&2; exit 3; }
case " $* " in
  *" --no-dev "*) ;;
  *) echo "refusing dev install" >&2; exit 4 ;;
esac
mkdir -p vendor/acme/lib vendor/composer
echo '<?php' > vendor/acme/lib/src.php
echo '<?php // autoload' > vendor/autoload.php
echo "Generating optimized autoload files"
"""

FAKE_COMPOSER_FAIL = """#!/bin/sh
echo "Your requirements could not be resolved to an installable set of packages." >&2
exit 2
"""


def write(path, content=""):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    return path


def make_tree(root, files):
    for rel, content in files.items():
        write(os.path.join(root, *rel.split("/")), content)
    return root


@pytest.fixture()
def tree(tmp_path):
    def _tree(files, name="myplugin"):
        return make_tree(str(tmp_path / name), files)
    return _tree


@pytest.fixture()
def fake_composer(tmp_path, monkeypatch):
    bindir = tmp_path / "fakebin"
    bindir.mkdir()

    def _install(script=FAKE_COMPOSER_OK):
        path = bindir / "composer"
        path.write_text(script, encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        monkeypatch.setenv("PATH", str(bindir) + os.pathsep + os.environ.get("PATH", ""))
        return str(path)

    return _install


@pytest.fixture()
def no_composer(tmp_path, monkeypatch):
    empty = tmp_path / "emptybin"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))
    return str(empty)
