"""Tests for symlink-escape-safe copying."""

import os
import sys
from unittest.mock import Mock

import pytest

from path_config import PathConfig
from path_errors import ConfigurationError, NotFound, PermissionViolation
from safe_copy import CopyStats, SafeCopyEngine, safe_copy
from utils.host_fs import HostFilesystem

pytestmark = pytest.mark.skipif(
    sys.platform == "win32", reason="symlinks need privileges on Windows"
)


@pytest.fixture
def tree(tmp_path):
    """Build root/src with nested files plus an outside directory.

    Layout:
        root/src/a.txt                "alpha"
        root/src/sub/b.txt            "beta"
        root/src/sub/deeper/c.txt     "gamma"
        root/shared.txt               "shared"
        outside/secret.txt            "secret"
    """
    root = tmp_path / "root"
    src = root / "src"
    (src / "sub" / "deeper").mkdir(parents=True)
    (src / "a.txt").write_text("alpha")
    (src / "sub" / "b.txt").write_text("beta")
    (src / "sub" / "deeper" / "c.txt").write_text("gamma")
    (root / "shared.txt").write_text("shared")

    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.txt").write_text("secret")

    return {
        "root": root,
        "src": src,
        "outside": outside,
        "dest": tmp_path / "dest",
    }


class TestNormalCopying:
    """Copies that stay within the root."""

    def test_copies_every_file(self, tree):
        """Every file is reproduced with identical contents."""
        stats = safe_copy(tree["src"], tree["dest"], root=tree["root"])

        dest = tree["dest"]
        assert (dest / "a.txt").read_text() == "alpha"
        assert (dest / "sub" / "b.txt").read_text() == "beta"
        assert (dest / "sub" / "deeper" / "c.txt").read_text() == "gamma"

        assert isinstance(stats, CopyStats)
        assert stats.files_copied == 3
        assert stats.directories_created == 3
        assert stats.bytes_copied == len("alpha") + len("beta") + len("gamma")
        assert stats.ignored == 0

    def test_existing_destination(self, tree):
        """An existing destination directory is reused."""
        tree["dest"].mkdir()
        stats = safe_copy(tree["src"], tree["dest"], root=tree["root"])
        assert stats.directories_created == 2
        assert (tree["dest"] / "a.txt").exists()

    def test_link_inside_root_is_followed(self, tree):
        """A file symlink whose target is inside root is copied as a file."""
        os.symlink(tree["root"] / "shared.txt", tree["src"] / "link.txt")
        safe_copy(tree["src"], tree["dest"], root=tree["root"])

        copied = tree["dest"] / "link.txt"
        assert not copied.is_symlink()
        assert copied.read_text() == "shared"

    def test_directory_link_inside_root(self, tree):
        """A directory symlink inside root is copied as a real directory."""
        other = tree["root"] / "other"
        other.mkdir()
        (other / "d.txt").write_text("delta")
        os.symlink(other, tree["src"] / "alias")

        safe_copy(tree["src"], tree["dest"], root=tree["root"])

        alias = tree["dest"] / "alias"
        assert alias.is_dir() and not alias.is_symlink()
        assert (alias / "d.txt").read_text() == "delta"

    def test_single_file_into_directory(self, tree):
        """A file copied onto an existing directory lands inside it."""
        tree["dest"].mkdir()
        safe_copy(tree["src"] / "a.txt", tree["dest"], root=tree["root"])
        assert (tree["dest"] / "a.txt").read_text() == "alpha"

    def test_single_file_to_path(self, tree):
        """A file copied onto a new path takes that name."""
        target = tree["dest"].parent / "renamed.txt"
        stats = safe_copy(tree["src"] / "a.txt", target, root=tree["root"])
        assert target.read_text() == "alpha"
        assert stats.files_copied == 1

    def test_preserves_timestamps(self, tree):
        """Metadata is preserved by default."""
        source = tree["src"] / "a.txt"
        os.utime(source, (1_000_000, 1_000_000))
        safe_copy(tree["src"], tree["dest"], root=tree["root"])
        assert os.stat(tree["dest"] / "a.txt").st_mtime == 1_000_000

    def test_metadata_not_preserved_when_disabled(self, tree):
        """preserve_metadata=False copies contents only."""
        source = tree["src"] / "a.txt"
        os.utime(source, (1_000_000, 1_000_000))
        engine = SafeCopyEngine(config=PathConfig(preserve_metadata=False))
        engine.safe_copy(tree["src"], tree["dest"], root=tree["root"])
        assert os.stat(tree["dest"] / "a.txt").st_mtime != 1_000_000


class TestSymlinksOutOfRoot:
    """Every escape route raises PermissionViolation."""

    def test_file_link_as_child(self, tree):
        """A direct child linking to a file outside root."""
        os.symlink(tree["outside"] / "secret.txt", tree["src"] / "leak.txt")
        with pytest.raises(PermissionViolation) as excinfo:
            safe_copy(tree["src"], tree["dest"], root=tree["root"])

        assert excinfo.value.path.endswith("leak.txt")
        assert excinfo.value.root == str(tree["root"])
        assert isinstance(excinfo.value, PermissionError)

    def test_source_is_link(self, tree):
        """The source itself is a directory symlink leading outside."""
        portal = tree["root"] / "portal"
        os.symlink(tree["outside"], portal)
        with pytest.raises(PermissionViolation):
            safe_copy(portal, tree["dest"], root=tree["root"])
        assert not tree["dest"].exists()

    def test_file_source_is_link(self, tree):
        """A single-file copy through an escaping link."""
        link = tree["root"] / "leak.txt"
        os.symlink(tree["outside"] / "secret.txt", link)
        with pytest.raises(PermissionViolation):
            safe_copy(link, tree["dest"], root=tree["root"])

    def test_directory_link_as_child(self, tree):
        """A child directory symlink leading outside."""
        os.symlink(tree["outside"], tree["src"] / "portal")
        with pytest.raises(PermissionViolation):
            safe_copy(tree["src"], tree["dest"], root=tree["root"])

    def test_nested_two_levels(self, tree):
        """An escaping link buried two directories deep."""
        os.symlink(
            tree["outside"] / "secret.txt",
            tree["src"] / "sub" / "deeper" / "leak.txt"
        )
        with pytest.raises(PermissionViolation):
            safe_copy(tree["src"], tree["dest"], root=tree["root"])
        assert not (tree["dest"] / "sub" / "deeper" / "leak.txt").exists()

    def test_source_outside_root(self, tree):
        """A plain file outside root is refused."""
        with pytest.raises(PermissionViolation, match="not in"):
            safe_copy(tree["outside"] / "secret.txt", tree["dest"], root=tree["root"])


class TestIgnore:
    """Tests for the ignore set."""

    def test_ignored_file_absent(self, tree):
        """A matched file is skipped without error."""
        skipped = tree["src"] / "sub" / "b.txt"
        stats = safe_copy(tree["src"], tree["dest"], root=tree["root"], ignore=[str(skipped)])

        assert skipped.exists()
        assert not (tree["dest"] / "sub" / "b.txt").exists()
        assert (tree["dest"] / "sub" / "deeper" / "c.txt").exists()
        assert stats.ignored == 1

    def test_ignored_directory_not_recursed(self, tree):
        """An ignored directory is neither created nor walked."""
        stats = safe_copy(
            tree["src"], tree["dest"], root=tree["root"], ignore=[tree["src"] / "sub"]
        )
        assert not (tree["dest"] / "sub").exists()
        assert stats.files_copied == 1

    def test_glob_pattern(self, tree):
        """Glob entries match by basename."""
        (tree["src"] / "debug.log").write_text("noise")
        safe_copy(tree["src"], tree["dest"], root=tree["root"], ignore=["*.log"])
        assert not (tree["dest"] / "debug.log").exists()
        assert (tree["dest"] / "a.txt").exists()

    def test_directory_pattern_with_separator(self, tree):
        """'*/.git' skips a .git directory wherever it sits."""
        (tree["src"] / ".git").mkdir()
        (tree["src"] / ".git" / "HEAD").write_text("ref")
        (tree["src"] / "sub" / ".git").mkdir()

        stats = safe_copy(tree["src"], tree["dest"], root=tree["root"], ignore=["*/.git"])

        assert not (tree["dest"] / ".git").exists()
        assert not (tree["dest"] / "sub" / ".git").exists()
        assert (tree["dest"] / "a.txt").exists()
        assert stats.ignored == 2

    def test_path_with_glob_characters(self, tree):
        """A literal path containing brackets is skipped by exact match."""
        bracketed = tree["src"] / "file[1].txt"
        bracketed.write_text("skip")
        (tree["src"] / "keep.txt").write_text("keep")

        stats = safe_copy(tree["src"], tree["dest"], root=tree["root"], ignore=[str(bracketed)])

        assert not (tree["dest"] / "file[1].txt").exists()
        assert (tree["dest"] / "keep.txt").read_text() == "keep"
        assert stats.ignored == 1

    def test_ignored_escape_is_not_an_error(self, tree):
        """An ignored entry is skipped before its containment check."""
        leak = tree["src"] / "leak.txt"
        os.symlink(tree["outside"] / "secret.txt", leak)
        safe_copy(tree["src"], tree["dest"], root=tree["root"], ignore=[leak])
        assert not (tree["dest"] / "leak.txt").exists()


class TestErrors:
    """Configuration and missing-path errors."""

    def test_missing_root_before_any_io(self):
        """No root is a configuration error raised before touching the filesystem."""
        fs = Mock(spec=HostFilesystem)
        engine = SafeCopyEngine(fs=fs)

        with pytest.raises(ConfigurationError, match="requires a root"):
            engine.safe_copy("/src", "/dest", root=None)

        assert fs.method_calls == []

    def test_missing_source(self, tree):
        """Copying a file that does not exist raises NotFound."""
        with pytest.raises(NotFound):
            safe_copy(tree["root"] / "nope.txt", tree["dest"], root=tree["root"])

    def test_not_found_is_file_not_found(self, tree):
        """NotFound can be caught as FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            safe_copy(tree["root"] / "nope.txt", tree["dest"], root=tree["root"])


class TestInMemoryFilesystem:
    """The engine works against any Filesystem implementation."""

    @pytest.fixture
    def fs(self, memory_fs):
        memory_fs.add_file("/root/src/a.txt", b"alpha")
        memory_fs.add_file("/root/src/sub/b.txt", b"beta")
        memory_fs.add_file("/elsewhere/secret.txt", b"secret")
        return memory_fs

    def test_copy(self, fs):
        """Files are copied through the injected filesystem."""
        stats = SafeCopyEngine(fs=fs).safe_copy("/root/src", "/copy", root="/root")
        assert fs.read("/copy/a.txt") == b"alpha"
        assert fs.read("/copy/sub/b.txt") == b"beta"
        assert stats.to_dict() == {
            "files_copied": 2,
            "directories_created": 2,
            "ignored": 0,
            "bytes_copied": 9,
        }

    def test_abort_without_rollback(self, fs):
        """The first violation aborts; files already copied stay in place."""
        fs.add_link("/root/src/z-leak.txt", "/elsewhere/secret.txt")
        with pytest.raises(PermissionViolation):
            SafeCopyEngine(fs=fs).safe_copy("/root/src", "/copy", root="/root")

        assert fs.read("/copy/a.txt") == b"alpha"
        assert not fs.exists("/copy/z-leak.txt")

    def test_relative_ignore_entry(self, fs):
        """Ignore entries are compared in expanded form as well."""
        fs.cwd = "/root"
        SafeCopyEngine(fs=fs).safe_copy("/root/src", "/copy", root="/root", ignore=["src/a.txt"])
        assert not fs.exists("/copy/a.txt")
        assert fs.exists("/copy/sub/b.txt")
