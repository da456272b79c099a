"""
Behavior tests for path joining, path decomposition and the filesystem
provider seam.
"""

import os
from pathlib import Path

import pytest
from hypothesis import given, settings, strategies as st

from filekit.exceptions import FileKitError, PathError
from filekit.utils.paths import (
    FileSystemProvider,
    PathInfo,
    StandardFileSystemProvider,
    check_path_exists,
    get_current_filesystem_provider,
    join_path,
    path_info,
    restore_filesystem_provider,
    set_filesystem_provider_for_testing,
)

SEP = os.sep


def p(*parts: str) -> str:
    """Build an expected path with the platform separator."""
    return SEP.join(parts)


# ============================================================================
# JOIN_PATH BEHAVIOR
# ============================================================================

class TestJoinPath:
    """Separator normalisation of join_path."""

    def test_strips_redundant_separators_between_segments(self):
        assert join_path("a" + SEP, SEP + "b", "c" + SEP) == p("a", "b", "c")
        assert join_path("a", "b", "c") == p("a", "b", "c")

    def test_single_segment_loses_trailing_separator_only(self):
        assert join_path("a" + SEP + SEP) == "a"
        assert join_path(SEP + "a") == SEP + "a"

    def test_first_segment_keeps_leading_separator(self):
        assert join_path(SEP + "var" + SEP, "log") == SEP + "var" + SEP + "log"

    def test_root_as_first_segment(self):
        assert join_path(SEP, "tmp") == SEP + "tmp"

    def test_inner_separators_are_preserved(self):
        assert join_path("a", p("b", "c") + SEP) == p("a", "b", "c")

    def test_accepts_path_objects(self):
        assert join_path(Path("a"), "b") == p("a", "b")

    def test_empty_invocation_is_a_caller_error(self):
        with pytest.raises(PathError) as exc_info:
            join_path()

        assert exc_info.value.error_code == "PATH_001"
        assert isinstance(exc_info.value, ValueError)
        assert isinstance(exc_info.value, FileKitError)

    @given(st.lists(
        st.text(alphabet="abcxyz._-", min_size=1, max_size=8),
        min_size=1,
        max_size=6,
    ), st.lists(st.integers(min_value=0, max_value=3), min_size=12, max_size=12))
    @settings(max_examples=50, deadline=None)
    def test_extra_separators_never_change_result(self, segments, padding):
        padded = [
            SEP * padding[2 * i] + segment + SEP * padding[2 * i + 1] if i else segment + SEP * padding[1]
            for i, segment in enumerate(segments)
        ]

        assert join_path(*padded) == SEP.join(segments)
        assert not join_path(*padded).endswith(SEP)


# ============================================================================
# PATH_INFO / PATHINFO BEHAVIOR
# ============================================================================

class TestPathInfo:
    """Decomposition and recomposition of paths."""

    @pytest.mark.parametrize("path,expected", [
        (p("docs", "report.pdf"), PathInfo("docs", "report", "pdf")),
        ("report.pdf", PathInfo("", "report", "pdf")),
        ("README", PathInfo("", "README", "")),
        (p("tmp", "archive.tar.gz"), PathInfo("tmp", "archive.tar", "gz")),
        (".bashrc", PathInfo("", ".bashrc", "")),
        (p("a", "notes (draft).txt"), PathInfo("a", "notes (draft)", "txt")),
    ])
    def test_decomposition(self, path, expected):
        assert path_info(path) == expected

    @pytest.mark.parametrize("path", [
        p("docs", "report.pdf"),
        "report.pdf",
        "README",
        p("x", "y", "Makefile"),
        SEP + "report.pdf",
    ])
    def test_recomposition_round_trips(self, path):
        assert path_info(path).compose() == path

    def test_trailing_separators_are_ignored(self):
        assert path_info(p("data", "backups") + SEP + SEP) == PathInfo("data", "backups", "")
        assert path_info("backups" + SEP).compose("backups (1)") == "backups (1)"

    def test_bare_root_is_kept(self):
        assert path_info(SEP) == PathInfo(SEP, "", "")

    def test_compose_with_new_stem_keeps_directory_and_extension(self):
        info = path_info(p("docs", "report.pdf"))

        assert info.compose("summary") == p("docs", "summary.pdf")
        assert info.stem == "report"

    def test_compose_without_extension_adds_no_dot(self):
        assert path_info("README").compose("README (1)") == "README (1)"

    def test_root_directory_gets_no_doubled_separator(self):
        assert path_info(SEP + "report.pdf").compose("x") == SEP + "x.pdf"

    def test_filename_property(self):
        assert PathInfo("d", "a", "txt").filename == "a.txt"
        assert PathInfo("d", "a", "").filename == "a"

    def test_pathinfo_is_immutable(self):
        info = PathInfo("d", "a", "txt")
        with pytest.raises(AttributeError):
            info.stem = "b"


# ============================================================================
# FILESYSTEM PROVIDER SEAM
# ============================================================================

class TestFilesystemProvider:
    """Provider protocol and swapping hooks."""

    def test_standard_provider_satisfies_protocol(self):
        assert isinstance(StandardFileSystemProvider(), FileSystemProvider)

    def test_memory_provider_satisfies_protocol(self, memory_fs):
        assert isinstance(memory_fs, FileSystemProvider)

    def test_set_and_restore_provider(self, memory_fs):
        # memory_fs fixture already installed itself
        assert get_current_filesystem_provider() is memory_fs

        replacement = StandardFileSystemProvider()
        previous = set_filesystem_provider_for_testing(replacement)
        assert previous is memory_fs
        assert get_current_filesystem_provider() is replacement

        restore_filesystem_provider(previous)
        assert get_current_filesystem_provider() is memory_fs

    def test_standard_provider_readability(self, tmp_path):
        provider = StandardFileSystemProvider()
        target = tmp_path / "f.txt"
        target.write_text("x")

        assert provider.is_readable(str(target))
        assert not provider.is_readable(str(tmp_path / "missing"))

    def test_standard_provider_glob_is_sorted(self, tmp_path):
        for name in ("c", "a", "b"):
            (tmp_path / name).write_text(name)

        result = StandardFileSystemProvider().glob(str(tmp_path / "*"))

        assert result == sorted(result)
        assert [os.path.basename(r) for r in result] == ["a", "b", "c"]


class TestCheckPathExists:
    """Existence checks through the provider."""

    def test_files_and_directories_exist(self, tmp_path):
        (tmp_path / "f").write_text("x")

        assert check_path_exists(tmp_path / "f")
        assert check_path_exists(tmp_path)
        assert not check_path_exists(tmp_path / "missing")

    def test_uses_explicit_provider(self, memory_fs):
        memory_fs.add_file(p("", "virtual", "file.txt"))

        assert check_path_exists(p("", "virtual", "file.txt"), fs_provider=memory_fs)
        assert memory_fs.calls("exists") == [p("", "virtual", "file.txt")]

    def test_provider_errors_are_reported_as_missing(self, mocker):
        provider = mocker.Mock(spec=StandardFileSystemProvider)
        provider.exists.side_effect = PermissionError("denied")

        assert check_path_exists("anything", fs_provider=provider) is False
