"""Unit tests for the filesystem walker."""

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from java_runtimes.errors import InvalidDepthError
from java_runtimes.types import CandidateSource
from java_runtimes.walker import PathWalker, check_max_depth, normalize_roots

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="POSIX symlinks")


@pytest.fixture
def walker():
    return PathWalker()


def _paths(runtimes):
    return sorted(runtime.path for runtime in runtimes)


class TestDepthBound:
    """Test max_depth handling."""

    def test_installation_at_exact_depth(self, walker, make_java_home, search_root):
        """An installation D levels down needs max_depth >= D."""
        home = make_java_home("a/b/jdk-11")  # depth 3

        assert walker.walk([search_root], 2) == []
        assert _paths(walker.walk([search_root], 3)) == [home]

    def test_root_itself_is_depth_zero(self, walker, make_java_home):
        home = make_java_home("jdk-17")
        assert _paths(walker.walk([home], 0)) == [home]

    def test_depth_zero_does_not_descend(self, walker, make_java_home, search_root):
        make_java_home("jdk-17")
        assert walker.walk([search_root], 0) == []

    @pytest.mark.parametrize("bad_depth", [-1, "2", 1.5, True, None])
    def test_invalid_depth_fails_fast(self, walker, search_root, bad_depth):
        with pytest.raises(InvalidDepthError):
            walker.walk([search_root], bad_depth)

    def test_invalid_depth_is_value_error(self):
        with pytest.raises(ValueError, match="non-negative integer"):
            check_max_depth(-3)


class TestTraversal:
    """Test candidate discovery."""

    def test_finds_several_installations(self, walker, make_java_home, search_root):
        jdk8 = make_java_home("jdk1.8.0_291")
        jdk17 = make_java_home("jdk-17.0.2")
        jdk21 = make_java_home("vendors/temurin-21")

        assert _paths(walker.walk([search_root], 2)) == sorted([jdk8, jdk17, jdk21])

    def test_does_not_descend_into_installation(self, walker, make_java_home, search_root):
        """A JDK 8 with an embedded jre/ is reported once."""
        jdk = make_java_home("jdk1.8.0_291")
        make_java_home("jdk1.8.0_291/jre")
        make_java_home("jdk1.8.0_291/lib/nested-jdk")

        runtimes = walker.walk([search_root], 5)

        assert _paths(runtimes) == [jdk]

    def test_skips_missing_roots(self, walker, make_java_home, search_root):
        home = make_java_home("jdk-17")

        runtimes = walker.walk([search_root / "missing", search_root], 1)

        assert _paths(runtimes) == [home]

    def test_skips_file_root(self, walker, search_root):
        file_root = search_root / "not-a-dir"
        file_root.write_text("")

        assert walker.walk([file_root], 2) == []

    def test_rejects_invalid_candidates(self, walker, make_java_home, search_root):
        """A bin/java that is not executable is not a Java home."""
        if sys.platform == "win32":
            pytest.skip("POSIX permissions")
        make_java_home("broken", executable=False)
        assert walker.walk([search_root], 2) == []

    def test_candidates_in_name_order(self, walker, make_java_home, search_root):
        make_java_home("b-jdk")
        make_java_home("a-jdk")
        make_java_home("c/jdk")

        names = [c.path.name for c in walker.iter_candidates(search_root, 2)]

        assert names == ["a-jdk", "b-jdk", "jdk"]

    def test_candidate_source(self, walker, make_java_home, search_root):
        make_java_home("jdk-17")

        candidates = list(walker.iter_candidates(search_root, 1))

        assert len(candidates) == 1
        assert candidates[0].source == CandidateSource.FILESYSTEM_WALK
        assert candidates[0].origin == str(search_root)

    def test_accepts_single_root(self, walker, make_java_home, search_root):
        home = make_java_home("jdk-17")
        assert _paths(walker.walk(str(search_root), 1)) == [home]

    def test_normalize_roots(self):
        assert normalize_roots("/opt") == [Path("/opt")]
        assert normalize_roots(["/opt", Path("/usr")]) == [Path("/opt"), Path("/usr")]

    def test_idempotent(self, walker, make_java_home, search_root):
        make_java_home("jdk-17")
        make_java_home("x/jdk-21")

        first = walker.walk([search_root], 3)
        second = walker.walk([search_root], 3)

        assert set(first) == set(second)


class TestErrorTolerance:
    """Unreadable directories exclude only their own subtree."""

    def test_permission_denied_subtree(self, walker, make_java_home, search_root):
        make_java_home("locked/jdk-8")
        open_home = make_java_home("open/jdk-11")
        locked = search_root / "locked"
        real_scandir = os.scandir

        def fake_scandir(path):
            if Path(path) == locked:
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        with patch("java_runtimes.walker.os.scandir", side_effect=fake_scandir):
            runtimes = walker.walk([search_root], 2)

        assert _paths(runtimes) == [open_home]


@posix_only
class TestSymlinks:
    """Test symlink following and loop safety."""

    def test_symlink_loop_terminates(self, walker, make_java_home, search_root):
        """A link back to an ancestor does not recurse forever."""
        home = make_java_home("a/jdk-17")
        os.symlink(search_root, search_root / "a" / "loop")

        runtimes = walker.walk([search_root], 50)

        assert _paths(runtimes) == [home]

    def test_each_target_visited_once(self, walker, make_java_home, search_root):
        target = make_java_home("real/jdk-21").parent
        os.symlink(target, search_root / "link1")
        os.symlink(target, search_root / "link2")

        candidates = list(walker.iter_candidates(search_root, 3))

        assert len(candidates) == 1

    def test_link_reached_first_does_not_hide_shallower_real_path(
        self, walker, make_java_home, search_root
    ):
        """a/link -> b sorts before b, yet b/jdk-17 stays within depth 2."""
        home = make_java_home("b/jdk-17")
        (search_root / "a").mkdir()
        os.symlink(search_root / "b", search_root / "a" / "link")

        runtimes = walker.walk([search_root], 2)

        assert _paths(runtimes) == [home]

    def test_follows_link_to_outside_installation(self, walker, search_root, make_java_home):
        outside = make_java_home("elsewhere/jdk-21")
        roots = search_root / "roots"
        roots.mkdir()
        os.symlink(outside, roots / "current")

        runtimes = walker.walk([roots], 1)

        assert _paths(runtimes) == [outside]

    def test_follow_symlinks_disabled(self, make_java_home, search_root):
        outside = make_java_home("elsewhere/jdk-21")
        roots = search_root / "roots"
        roots.mkdir()
        os.symlink(outside, roots / "current")

        walker = PathWalker(follow_symlinks=False)

        assert walker.walk([roots], 1) == []

    def test_broken_symlink_ignored(self, walker, search_root, make_java_home):
        home = make_java_home("jdk-17")
        os.symlink(search_root / "gone", search_root / "dangling")

        assert _paths(walker.walk([search_root], 2)) == [home]
