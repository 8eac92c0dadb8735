import pytest

from processors.normalize import normalize


class TestNormalize:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("plain", "plain"),
            (r"sm\:p-4", "sm:p-4"),
            (r"w-1\/2", "w-1/2"),
            (r"top-\[10px\]", "top-[10px]"),
            (r"hover\:bg-\(--x\)", "hover:bg-(--x)"),
            ("a\\\\b", "a\\b"),
            ("trailing\\", "trailing\\"),
        ],
    )
    def test_removes_one_backslash_per_escape(self, raw, expected):
        assert normalize(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (r"\31 0", "10"),
            (r"\32xl\:p-4", "2xl:p-4"),
            (r"\000041", "A"),
            (r"\0", "\ufffd"),
        ],
    )
    def test_hex_escapes(self, raw, expected):
        assert normalize(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["plain", r"sm\:p-4", r"w-1\/2", r"\31 0", "trailing\\", "x:y"],
    )
    def test_idempotent(self, raw):
        once = normalize(raw)
        assert normalize(once) == once

    def test_escaped_backslash_is_not_idempotent(self):
        # the backslash left behind by "\\" escapes the next character
        once = normalize("a\\\\\\\\b")

        assert once == "a\\\\b"
        assert normalize(once) == "a\\b"
