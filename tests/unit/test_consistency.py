"""
Unit tests for history/layer consistency and digest helpers.
"""
import pytest

from imagedesc import InconsistentHistory, parse_image
from imagedesc.UTILS.consistency import check_consistency, ensure_consistent
from imagedesc.UTILS.digest import calculate_digest, validate_digest

DIFF_A = "sha256:" + "a" * 64
DIFF_B = "sha256:" + "b" * 64


def _image(history, diff_ids):
    entries = ",".join(
        '{"created_by":"step %d","empty_layer":%s}' % (i, "true" if empty else "false")
        for i, empty in enumerate(history)
    )
    ids = ",".join('"%s"' % d for d in diff_ids)
    raw = '{"history":[%s],"rootfs":{"type":"layers","diff_ids":[%s]}}' % (entries, ids)
    return parse_image(raw.encode())


class TestConsistency:
    """Tests for check_consistency and ensure_consistent."""

    def test_empty_layer_entries_are_not_counted(self):
        image = _image([False, True], [DIFF_A])
        report = check_consistency(image)
        assert report.non_empty_history == 1
        assert report.diff_ids == 1
        assert report.consistent
        assert report.invalid_diff_ids == []

    def test_mismatch(self):
        image = _image([False, False], [DIFF_A])
        report = check_consistency(image)
        assert not report.consistent
        with pytest.raises(InconsistentHistory):
            ensure_consistent(image)

    def test_repeated_layers_count_twice(self):
        image = _image([False, False], [DIFF_A, DIFF_A])
        assert ensure_consistent(image).consistent

    def test_no_history(self):
        assert check_consistency(_image([], [])).consistent
        assert not check_consistency(_image([], [DIFF_B])).consistent

    def test_malformed_diff_ids_reported(self):
        image = _image([False, False], [DIFF_A, "sha256:aa.."])
        report = check_consistency(image)
        assert report.consistent
        assert report.invalid_diff_ids == ["sha256:aa.."]


class TestDigest:
    """Tests for digest helpers."""

    def test_calculate_digest(self):
        assert calculate_digest(b"") == (
            "sha256:e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
        )

    def test_calculate_digest_rejects_text(self):
        with pytest.raises(ValueError):
            calculate_digest("abc")

    def test_variable_length_algorithm_rejected(self):
        with pytest.raises(ValueError):
            calculate_digest(b"x", "shake_128")
        with pytest.raises(ValueError):
            calculate_digest(b"x", "no-such-hash")

    def test_validate_digest(self):
        assert validate_digest(DIFF_A)
        assert validate_digest(calculate_digest(b"layer", "sha512"))
        assert not validate_digest("sha256:aa..")
        assert not validate_digest("a" * 64)
        assert not validate_digest(None)
