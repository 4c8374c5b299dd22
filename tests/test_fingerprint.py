"""Tests for blob fingerprints and DependencyFile integrity checks."""

import pytest

from depfiles.fingerprint import fingerprint, fingerprint_bytes
from depfiles.models import DependencyFile
from errors import IntegrityError

EMPTY_BLOB_SHA = "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391"
HELLO_BLOB_SHA = "ce013625030ba8dba906f756967f9e9ca394464a"


class TestFingerprint:
    """Tests for fingerprint() and fingerprint_bytes()."""

    def test_matches_git_for_empty_content(self):
        assert fingerprint_bytes(b"") == EMPTY_BLOB_SHA

    def test_matches_git_hash_object(self, tmp_path):
        path = tmp_path / "Gemfile"
        path.write_bytes(b"hello\n")
        assert fingerprint(str(path)) == HELLO_BLOB_SHA

    def test_deterministic(self, tmp_path):
        a = tmp_path / "a.lock"
        b = tmp_path / "b.lock"
        a.write_bytes(b"GEM\n  specs:\n    rails (6.0.0)\n")
        b.write_bytes(b"GEM\n  specs:\n    rails (6.0.0)\n")
        assert fingerprint(str(a)) == fingerprint(str(b))

    def test_single_byte_change(self):
        assert fingerprint_bytes(b"rails (6.0.0)\n") != fingerprint_bytes(b"rails (6.0.1)\n")

    def test_length_is_part_of_digest(self):
        # a trailing NUL must not collide with the bare content
        assert fingerprint_bytes(b"abc") != fingerprint_bytes(b"abc\x00")

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            fingerprint(str(tmp_path / "missing.lock"))


class TestDependencyFile:
    """Tests for DependencyFile snapshots."""

    def test_from_path_reads_content_and_sha(self, tmp_path):
        path = tmp_path / "Gemfile"
        path.write_bytes(b"hello\n")
        df = DependencyFile.from_path(str(path))
        assert df.path == str(path)
        assert df.content == b"hello\n"
        assert df.sha == HELLO_BLOB_SHA

    def test_from_path_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            DependencyFile.from_path(str(tmp_path / "Gemfile.lock"))

    def test_verify_integrity_ok(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text('{"name": "demo"}\n', encoding="utf-8")
        DependencyFile.from_path(str(path)).verify_integrity()

    def test_verify_integrity_reports_mismatch(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text('{"name": "demo"}\n', encoding="utf-8")
        df = DependencyFile.from_path(str(path))
        path.write_text('{"name": "tampered"}\n', encoding="utf-8")

        with pytest.raises(IntegrityError) as exc_info:
            df.verify_integrity()
        err = exc_info.value
        assert err.path == str(path)
        assert err.expected == df.sha
        assert err.actual == fingerprint(str(path))
        assert "expected: %s" % df.sha in str(err)

    def test_resync_then_verify(self, tmp_path):
        path = tmp_path / "Gemfile.lock"
        path.write_bytes(b"old\n")
        df = DependencyFile.from_path(str(path))
        path.write_bytes(b"new\n")

        df.resync()

        assert df.content == b"new\n"
        assert df.sha == fingerprint_bytes(b"new\n")
        df.verify_integrity()

    def test_resync_failure_keeps_fields(self, tmp_path):
        path = tmp_path / "Gemfile.lock"
        path.write_bytes(b"old\n")
        df = DependencyFile.from_path(str(path))
        path.unlink()

        with pytest.raises(OSError):
            df.resync()
        assert df.content == b"old\n"
        assert df.sha == fingerprint_bytes(b"old\n")

    def test_restore_writes_snapshot(self, tmp_path):
        path = tmp_path / "Gemfile.lock"
        path.write_bytes(b"old\n")
        df = DependencyFile.from_path(str(path))
        path.write_bytes(b"new\n")

        df.restore()

        assert path.read_bytes() == b"old\n"
        df.verify_integrity()

    def test_dict_round_trip_uses_base64(self, tmp_path):
        df = DependencyFile(path="Gemfile", sha=HELLO_BLOB_SHA, content=b"hello\n")
        data = df.to_dict()
        assert data == {"path": "Gemfile", "sha": HELLO_BLOB_SHA, "content": "aGVsbG8K"}
        assert DependencyFile.from_dict(data) == df
