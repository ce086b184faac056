"""Tests for the DiffParser."""

import pytest

from smart_paste.editing.diff_parser import (
    DiffParser, DiffHunk, parse_diff, parse_header, line_count_mismatches,
)


SINGLE_HUNK_DIFF = """\
@@ -1,2 +1,2 @@
-foo
+bar
 baz
"""

MULTI_HUNK_DIFF = """\
--- a/src/auth.py
+++ b/src/auth.py
@@ -5,3 +5,4 @@ def authenticate(user):
 import os
-import sys
+import hashlib
+import hmac
 import re
@@ -20 +21 @@
-    return hash(password)
+    return hmac.new(key, password, hashlib.sha256).hexdigest()
"""


class TestParse:
    def test_single_hunk(self):
        hunks = DiffParser().parse(SINGLE_HUNK_DIFF)

        assert len(hunks) == 1
        hunk = hunks[0]
        assert (hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines) == (1, 2, 1, 2)
        assert hunk.lines == ("-foo", "+bar", " baz")

    def test_multi_hunk_in_header_order(self):
        hunks = DiffParser().parse(MULTI_HUNK_DIFF)

        assert len(hunks) == 2
        assert hunks[0].old_start == 5
        assert hunks[1].old_start == 20
        assert hunks[0].lines == (" import os", "-import sys", "+import hashlib",
                                  "+import hmac", " import re")

    def test_headers_out_of_line_order_are_not_reordered(self):
        text = "@@ -9,1 +9,1 @@\n-x\n+y\n@@ -2,1 +2,1 @@\n-a\n+b\n"
        hunks = parse_diff(text)
        assert [h.old_start for h in hunks] == [9, 2]

    def test_counts_present(self):
        hunk = parse_diff("@@ -5,3 +5,4 @@\n")[0]
        assert (hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines) == (5, 3, 5, 4)

    def test_counts_omitted_default_to_one(self):
        hunk = parse_diff("@@ -5 +5 @@\n")[0]
        assert hunk.old_lines == 1
        assert hunk.new_lines == 1

    def test_zero_count_insertion(self):
        hunk = parse_diff("@@ -3,0 +4,2 @@\n+a\n+b\n")[0]
        assert hunk.old_lines == 0
        assert hunk.is_insertion is True

    def test_lines_before_first_header_are_discarded(self):
        text = "Here is the patch you asked for:\n\n" + SINGLE_HUNK_DIFF
        hunks = parse_diff(text)
        assert len(hunks) == 1
        assert hunks[0].lines == ("-foo", "+bar", " baz")

    def test_no_header_returns_empty(self):
        assert parse_diff("def foo():\n    return 1\n") == []

    def test_empty_text_returns_empty(self):
        assert parse_diff("") == []

    def test_empty_hunk_is_valid(self):
        hunks = parse_diff("@@ -1,1 +1,1 @@\n@@ -4,2 +4,1 @@\n-x\n")
        assert len(hunks) == 2
        assert hunks[0].lines == ()
        assert hunks[1].lines == ("-x",)

    def test_trailing_newline_adds_no_body_line(self):
        with_newline = parse_diff(SINGLE_HUNK_DIFF)[0]
        without_newline = parse_diff(SINGLE_HUNK_DIFF.rstrip("\n"))[0]
        assert with_newline.lines == without_newline.lines

    def test_blank_lines_inside_body_are_kept(self):
        hunk = parse_diff("@@ -1,3 +1,3 @@\n a\n\n+b\n")[0]
        assert hunk.lines == (" a", "", "+b")

    def test_crlf_line_endings(self):
        hunk = parse_diff(SINGLE_HUNK_DIFF.replace("\n", "\r\n"))[0]
        assert hunk.lines == ("-foo", "+bar", " baz")

    def test_malformed_header_is_dropped(self):
        text = "@@ -1,2 +1,2 @@\n-foo\n@@ garbage @@\n+bar\n"
        hunks = parse_diff(text)
        assert len(hunks) == 1
        assert hunks[0].lines == ("-foo", "+bar")

    def test_malformed_header_without_open_hunk(self):
        assert parse_diff("@@ not a header @@\n+bar\n") == []

    def test_hunks_are_immutable(self):
        hunk = parse_diff(SINGLE_HUNK_DIFF)[0]
        with pytest.raises(AttributeError):
            hunk.old_start = 3


class TestParseHeader:
    def test_full_header(self):
        assert parse_header("@@ -12,4 +13,6 @@") == (12, 4, 13, 6)

    def test_section_heading_is_ignored(self):
        assert parse_header("@@ -1 +1,2 @@ class Foo:") == (1, 1, 1, 2)

    def test_not_a_header(self):
        assert parse_header("@@ -a,b +c,d @@") is None
        assert parse_header(" @@ -1 +1 @@") is None

    def test_restated_header_round_trips(self):
        for text in ("@@ -5,3 +5,4 @@\n", "@@ -5 +5 @@\n", "@@ -0,0 +1,7 @@\n"):
            hunk = parse_diff(text)[0]
            assert parse_header(hunk.header) == (
                hunk.old_start, hunk.old_lines, hunk.new_start, hunk.new_lines,
            )


class TestLineCounts:
    def test_consistent_hunk(self):
        hunks = parse_diff(SINGLE_HUNK_DIFF)
        assert hunks[0].body_old_count == 2
        assert hunks[0].body_new_count == 2
        assert line_count_mismatches(hunks) == []

    def test_mismatch_is_reported_not_raised(self):
        hunks = parse_diff("@@ -1,5 +1,1 @@\n-foo\n+bar\n")
        problems = line_count_mismatches(hunks)
        assert len(problems) == 1
        assert "declares 5 original line(s)" in problems[0]

    def test_both_counts_wrong(self):
        hunk = DiffHunk(old_start=1, old_lines=3, new_start=1, new_lines=3,
                        lines=("-a", "+b"))
        assert len(line_count_mismatches([hunk])) == 2
