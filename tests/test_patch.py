"""Tests for apply_patch()."""

import difflib
import os
import shlex
import shutil
import sys

import pytest

from depfiles.fingerprint import fingerprint, fingerprint_bytes
from depfiles.models import DependencyFile
from depfiles.patch import apply_patch
from errors import ExecutionError, PatchError

FAKES = os.path.join(os.path.dirname(__file__), "fakes")

requires_patch = pytest.mark.skipif(shutil.which("patch") is None,
                                    reason="patch executable not available")


def tool(name):
    return "%s %s" % (shlex.quote(sys.executable), shlex.quote(os.path.join(FAKES, name)))


def make_diff(before, after):
    return "".join(difflib.unified_diff(
        before.splitlines(keepends=True),
        after.splitlines(keepends=True),
        fromfile="a/Gemfile.lock",
        tofile="b/Gemfile.lock",
    ))


BEFORE = "GEM\n  remote: https://rubygems.org/\n  specs:\n    rails (6.0.0)\n    rack (2.0.0)\n"
AFTER = "GEM\n  remote: https://rubygems.org/\n  specs:\n    rails (6.1.0)\n    rack (2.0.0)\n"


@requires_patch
class TestApplyPatchWithPatchTool:
    """Tests running the real patch executable."""

    def test_patch_updates_content_and_sha(self, tmp_path):
        path = tmp_path / "Gemfile.lock"
        path.write_text(BEFORE, encoding="utf-8")
        df = DependencyFile.from_path(str(path))

        apply_patch(df, make_diff(BEFORE, AFTER))

        assert path.read_text(encoding="utf-8") == AFTER
        assert df.content == AFTER.encode("utf-8")
        assert df.sha == fingerprint(str(path))
        df.verify_integrity()

    def test_applying_twice_fails_cleanly(self, tmp_path):
        path = tmp_path / "Gemfile.lock"
        path.write_text(BEFORE, encoding="utf-8")
        df = DependencyFile.from_path(str(path))
        diff = make_diff(BEFORE, AFTER)
        apply_patch(df, diff)
        sha_after_first = df.sha

        with pytest.raises(PatchError) as exc_info:
            apply_patch(df, diff)

        assert exc_info.value.returncode != 0
        assert exc_info.value.path == str(path)
        assert path.read_text(encoding="utf-8") == AFTER
        assert df.sha == sha_after_first
        assert not (tmp_path / "Gemfile.lock.rej").exists()

    def test_large_patch(self, tmp_path):
        before = "".join("    gem-%05d (1.0.0)\n" % i for i in range(20000))
        after = "".join("    gem-%05d (1.0.1)\n" % i for i in range(20000))
        diff = make_diff(before, after)
        assert len(diff) > 256 * 1024

        path = tmp_path / "Gemfile.lock"
        path.write_text(before, encoding="utf-8")
        df = DependencyFile.from_path(str(path))

        apply_patch(df, diff)

        assert df.content == after.encode("utf-8")
        assert df.sha == fingerprint_bytes(after.encode("utf-8"))


class TestApplyPatchWithFakeTools:
    """Tests with stand-in patch tools."""

    def test_output_drained_while_input_is_written(self, tmp_path):
        # the tool fills its stdout pipe before reading a large stdin
        path = tmp_path / "yarn.lock"
        path.write_text("old\n", encoding="utf-8")
        df = DependencyFile.from_path(str(path))
        patch_text = "y" * (512 * 1024) + "\n"

        apply_patch(df, patch_text, patch_command=tool("fake_chatty_patch.py"))

        assert df.content == patch_text.encode("utf-8")
        df.verify_integrity()

    def test_failure_carries_output(self, tmp_path, caplog):
        path = tmp_path / "package.json"
        path.write_text("{}\n", encoding="utf-8")
        df = DependencyFile.from_path(str(path))
        sha = df.sha

        with pytest.raises(PatchError) as exc_info:
            apply_patch(df, "not a diff", patch_command=tool("fake_reject_patch.py"))

        assert exc_info.value.returncode == 2
        assert "Only garbage was found" in exc_info.value.output
        assert "Only garbage was found" in caplog.text
        assert df.sha == sha
        assert df.content == b"{}\n"

    def test_missing_patch_tool(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text("{}\n", encoding="utf-8")
        df = DependencyFile.from_path(str(path))

        with pytest.raises(ExecutionError):
            apply_patch(df, "--- a\n+++ b\n", patch_command="lockstep-no-such-patch")

    def test_bytes_patch_passed_through_unchanged(self, tmp_path):
        path = tmp_path / "Gemfile.lock"
        path.write_bytes(b"old\n")
        df = DependencyFile.from_path(str(path))
        data = b"GEM\n    caf\xe9 (1.0.0)\n"

        apply_patch(df, data, patch_command=tool("fake_chatty_patch.py"))

        assert df.content == data
        assert df.sha == fingerprint_bytes(data)


@requires_patch
def test_real_patch_on_latin1_file(tmp_path):
    before = "GEM\n  specs:\n    caf\xe9 (1.0.0)\n".encode("latin-1")
    after = "GEM\n  specs:\n    caf\xe9 (1.1.0)\n".encode("latin-1")
    diff = make_diff(before.decode("latin-1"), after.decode("latin-1")).encode("latin-1")
    path = tmp_path / "Gemfile.lock"
    path.write_bytes(before)
    df = DependencyFile.from_path(str(path))

    apply_patch(df, diff)

    assert path.read_bytes() == after
    assert df.sha == fingerprint_bytes(after)
