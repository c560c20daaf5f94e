"""
Tests for the channel list text format: export, parse and diff.

Copyright (c) 2025 Steve Angelovich
Licensed under the MIT License - see LICENSE file for details.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from channel import Change, Channel, ChannelKind
from channel_text import (
    LineRecord, compute_changes, diff_channels, export_channels, format_line, parse_buffer
)
from errors import ExportError, ValidationError


def sample_channels():
    return [
        Channel(10, "Main", ChannelKind.CATEGORY, position=0),
        Channel(11, "general", ChannelKind.TEXT, position=0, parent_id=10, parent_name="Main", category_position=0),
        Channel(12, "off-topic", ChannelKind.TEXT, position=1, parent_id=10, parent_name="Main", category_position=0),
        Channel(13, "Lounge", ChannelKind.VOICE, position=0, parent_id=10, parent_name="Main", category_position=0),
    ]


class TestExport:
    """Test export_channels()"""

    def test_one_line_per_channel(self):
        text = export_channels(sample_channels(), comments=False)
        assert text.splitlines() == [
            "10 -> Main",
            "11 -> general",
            "12 -> off-topic",
            "13 -> Lounge",
        ]

    def test_comments_group_by_category(self):
        text = export_channels(sample_channels())
        lines = text.splitlines()
        assert lines[0].startswith("#")
        assert "# 📁 Main" in lines
        # heading comes right before the first channel of the block
        assert lines[lines.index("# 📁 Main") + 1] == "10 -> Main"

    def test_uncategorized_heading(self):
        channels = [Channel(5, "welcome", ChannelKind.TEXT)]
        assert "# 📁 (no category)" in export_channels(channels).splitlines()

    def test_ends_with_newline(self):
        assert export_channels(sample_channels()).endswith("\n")

    def test_empty_channel_list(self):
        assert export_channels([]) == ""

    def test_newline_in_name_rejected(self):
        with pytest.raises(ExportError):
            export_channels([Channel(1, "bad\nname", ChannelKind.TEXT)])

    @pytest.mark.parametrize("name", ["", " padded", "trailing\u2028", "cr\rname"])
    def test_name_that_cannot_be_parsed_back_rejected(self, name):
        with pytest.raises(ExportError):
            export_channels([Channel(1, name, ChannelKind.TEXT)])


class TestParse:
    """Test parse_buffer()"""

    def test_parse_simple_lines(self):
        records = parse_buffer("1 -> one\n2 -> two\n")
        assert records == [LineRecord(1, 1, "one"), LineRecord(2, 2, "two")]

    def test_comments_and_blank_lines_ignored(self):
        records = parse_buffer("# header\n\n   \n3 -> three\n")
        assert [r.channel_id for r in records] == [3]
        assert records[0].line_number == 4

    def test_whitespace_trimmed(self):
        records = parse_buffer("   7   ->    spaced name   \n")
        assert records[0].channel_id == 7
        assert records[0].name == "spaced name"

    def test_delimiter_without_spaces(self):
        assert parse_buffer("7->seven")[0].name == "seven"

    def test_name_may_contain_delimiter(self):
        assert parse_buffer("7 -> a -> b")[0].name == "a -> b"

    def test_name_may_contain_hash(self):
        assert parse_buffer("7 -> #1 fans")[0].name == "#1 fans"

    def test_missing_delimiter(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_buffer("7 seven\n")
        assert "line 1" in exc_info.value.problems[0]
        assert "delimiter" in exc_info.value.problems[0]

    def test_non_numeric_id(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_buffer("abc -> seven\n")
        assert "not a number" in exc_info.value.problems[0]

    def test_empty_name(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_buffer("7 ->   \n")
        assert "empty name" in exc_info.value.problems[0]

    def test_all_problems_collected(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_buffer("bad line\n1 -> ok\nx -> y\n9 ->\n")
        problems = exc_info.value.problems
        assert len(problems) == 3
        assert [p.split(":")[0] for p in problems] == ["line 1", "line 3", "line 4"]

    def test_crlf_line_endings(self):
        records = parse_buffer("1 -> one\r\n2 -> two\r\n")
        assert [r.name for r in records] == ["one", "two"]

    def test_unicode_line_separators_stay_in_name(self):
        records = parse_buffer("1 -> a\u2028b\n2 -> c\x0bd\n")
        assert [(r.line_number, r.name) for r in records] == [(1, "a\u2028b"), (2, "c\x0bd")]


class TestRoundTrip:
    """Parsing an export reproduces the id -> name mapping"""

    @pytest.mark.parametrize("comments", [True, False])
    def test_export_parse_round_trip(self, comments):
        channels = sample_channels() + [
            Channel(20, "ünïcödé-チャンネル", ChannelKind.TEXT),
            Channel(21, "name -> with arrow", ChannelKind.VOICE),
            Channel(22, "# not a comment", ChannelKind.FORUM),
            Channel(23, "a\u2028b", ChannelKind.VOICE),
            Channel(24, "para\u2029graph", ChannelKind.TEXT),
            Channel(25, "next\x85line\x0cfeed\x1dsep", ChannelKind.TEXT),
        ]
        records = parse_buffer(export_channels(channels, comments=comments))
        assert {r.channel_id: r.name for r in records} == {c.channel_id: c.name for c in channels}


class TestDiff:
    """Test diff_channels() and compute_changes()"""

    def setup_method(self):
        self.channels = sample_channels()
        self.text = export_channels(self.channels)

    def test_unchanged_buffer_has_no_changes(self):
        assert compute_changes(self.channels, self.text) == []

    def test_single_edit(self):
        edited = self.text.replace("12 -> off-topic", "12 -> chatter")
        assert compute_changes(self.channels, edited) == [Change(12, "off-topic", "chatter")]

    def test_changes_follow_channel_order(self):
        edited = "13 -> Voice\n11 -> lobby\n"
        changes = compute_changes(self.channels, edited)
        assert [c.channel_id for c in changes] == [11, 13]

    def test_omitted_channels_untouched(self):
        assert compute_changes(self.channels, "11 -> lobby\n") == [Change(11, "general", "lobby")]

    def test_unknown_id(self):
        with pytest.raises(ValidationError) as exc_info:
            compute_changes(self.channels, self.text + "999 -> ghost\n")
        assert "unknown channel ID 999" in str(exc_info.value)

    def test_duplicate_id(self):
        with pytest.raises(ValidationError) as exc_info:
            compute_changes(self.channels, "11 -> a\n12 -> off-topic\n11 -> b\n")
        problem = exc_info.value.problems[0]
        assert "line 3" in problem
        assert "duplicate channel ID 11" in problem
        assert "line 1" in problem

    def test_format_and_id_problems_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            compute_changes(self.channels, "garbage\n999 -> ghost\n")
        assert len(exc_info.value.problems) == 2

    def test_diff_channels_with_records(self):
        records = [LineRecord(1, 11, "general"), LineRecord(2, 13, "Stage Area")]
        assert diff_channels(self.channels, records) == [Change(13, "Lounge", "Stage Area")]

    def test_format_line(self):
        assert format_line(42, "name") == "42 -> name"


class TestValidationError:
    def test_message_lists_problems(self):
        error = ValidationError(["line 1: a", "line 2: b"])
        assert str(error).startswith("2 problems in channel list:")
        assert "line 2: b" in str(error)

    def test_singular_message(self):
        assert str(ValidationError(["line 1: a"])).startswith("1 problem in channel list:")
