import os

import pytest

from wp_zipper import tree_filter
from wp_zipper.exclusions import build_exclusions, default_excludes
from wp_zipper.tree_filter import matches, should_include, walk

from conftest import write

BUILTINS = default_excludes()


def test_builtin_excludes_on_sample_tree(tree):
    root = tree({
        "src/index.php": "<?php",
        ".git/config": "[core]",
        "node_modules/x.js": "x",
        "README.md": "# readme",
    })
    rels = {e.rel for e in walk(root, BUILTINS)}
    assert "src/index.php" in rels
    assert "README.md" in rels
    assert not any(r.startswith(".git") for r in rels)
    assert not any(r.startswith("node_modules") for r in rels)


def test_directory_pattern_excludes_dir_and_contents_not_sibling():
    rules = ["foo/*"]
    assert not should_include("foo", rules, is_dir=True)
    assert not should_include("foo/a.php", rules)
    assert not should_include("foo/deep/b.php", rules)
    assert should_include("foobar", rules, is_dir=True)
    assert should_include("foobar/a.php", rules)


def test_directory_pattern_does_not_match_file_of_same_name():
    assert should_include("foo", ["foo/*"], is_dir=False)


def test_leading_slash_and_bare_pattern_behave_the_same(tmp_path):
    slash = write(str(tmp_path / "a"), "/vendor-assets\n")
    bare = write(str(tmp_path / "b"), "vendor-assets\n")
    for ignore in (slash, bare):
        rules = build_exclusions([], ignore)
        assert not should_include("vendor-assets", rules, is_dir=True)
        assert not should_include("vendor-assets/logo.png", rules)
        assert should_include("vendor-assets-old/logo.png", rules)


def test_glob_matches_within_a_segment_at_any_depth():
    rules = ["*.log"]
    assert not should_include("debug.log", rules)
    assert not should_include("logs/2024/debug.log", rules)
    assert should_include("debug.log.php", rules)


def test_star_does_not_cross_segments():
    rules = ["assets/*.map"]
    assert not should_include("assets/app.js.map", rules)
    assert not should_include("build/assets/app.js.map", rules)
    assert should_include("assets/js/app.js.map", rules)


def test_path_fragment_matches_as_suffix():
    rules = ["assets/src"]
    assert not should_include("assets/src", rules, is_dir=True)
    assert not should_include("assets/src/main.scss", rules)
    assert not should_include("blocks/assets/src", rules, is_dir=True)
    assert should_include("assets/srcset.php", rules)


def test_always_excluded_names():
    assert not should_include("composer.json", [])
    assert not should_include("composer.lock", [])
    assert not should_include("vendor", [], is_dir=True)
    assert not should_include("vendor/autoload.php", [])
    assert not should_include(".wp_build_temp-1234", [], is_dir=True)
    assert not should_include(".wp_build_temp", [], is_dir=True)
    assert should_include("includes/vendor.php", [])


def test_top_level_file_named_like_builtin_is_excluded():
    # Literal-name matching cannot tell a dev directory from content of the same name.
    assert not should_include("tests", BUILTINS, is_dir=False)
    assert not should_include("bin", BUILTINS, is_dir=False)


@pytest.mark.parametrize("pattern", ["[unclosed", "", "a//b", "**", "/*"])
def test_odd_patterns_do_not_crash(pattern):
    should_include("some/path/file.php", [pattern])
    should_include("some", [pattern], is_dir=True)


def test_matches_on_split_parts():
    assert matches(["a", "b", "c"], False, "b")
    assert matches(["a", "b", "c"], False, "b/c")
    assert not matches(["a", "b", "c"], False, "a/c")
    assert not matches(["a"], True, "")


def test_excluded_directories_are_pruned(tree, monkeypatch):
    root = tree({
        "node_modules/pkg/index.js": "x",
        "node_modules/pkg/deep/more.js": "x",
        "inc/a.php": "<?php",
    })
    seen = []
    real = tree_filter.should_include

    def spy(rel, rules, is_dir=False, always=tree_filter.ALWAYS_EXCLUDE):
        seen.append(rel)
        return real(rel, rules, is_dir, always)

    monkeypatch.setattr(tree_filter, "should_include", spy)
    rels = [e.rel for e in walk(root, BUILTINS)]
    assert rels == ["inc", "inc/a.php"]
    assert "node_modules" in seen
    assert not any(r.startswith("node_modules/") for r in seen)


def test_walk_reports_kinds_and_sorted_order(tree):
    root = tree({
        "b.php": "",
        "a.php": "",
        "inc/z.php": "",
        "assets/app.js": "",
    })
    os.symlink("a.php", os.path.join(root, "link.php"))
    os.symlink("inc", os.path.join(root, "inc-link"))
    entries = list(walk(root, []))
    kinds = {e.rel: e.kind for e in entries}
    assert kinds["inc"] == "dir"
    assert kinds["a.php"] == "file"
    assert kinds["link.php"] == "link"
    assert kinds["inc-link"] == "link"
    assert "inc-link/z.php" not in kinds
    rels = [e.rel for e in entries]
    assert rels.index("a.php") < rels.index("b.php")
    assert rels.index("assets") < rels.index("inc")


def test_walk_skips_extra_always_excluded(tree):
    root = tree({"myplugin.zip": "PK", "main.php": ""})
    always = list(tree_filter.ALWAYS_EXCLUDE) + ["myplugin.zip"]
    assert [e.rel for e in walk(root, [], always)] == ["main.php"]


def test_dot_slash_ignore_line_matches_like_bare_name(tmp_path):
    ignore = write(str(tmp_path / "ign"), "./dist\n./assets/src/\n")
    rules = build_exclusions([], ignore)
    assert not should_include("dist", rules, is_dir=True)
    assert not should_include("dist/app.js", rules)
    assert not should_include("assets/src/main.scss", rules)
    assert should_include("assets/app.css", rules)
