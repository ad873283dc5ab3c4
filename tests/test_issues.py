"""Tests for issue header parsing and segmentation."""

from __future__ import annotations

import logging

import pytest

from timeline.issues import is_valid_issue, make_issue, parse_issue_header, segment_issues


class TestParseIssueHeader:
    def test_with_table_of_contents_marker(self) -> None:
        issue = parse_issue_header("2021년 2월호(통권61호) 목차")
        assert issue is not None
        assert issue.date == "2021-02"
        assert issue.issue_num == 61
        assert issue.label == "2021년 2월호"
        assert issue.articles == []

    def test_without_marker_and_spaced_number(self) -> None:
        issue = parse_issue_header("2023년 2월호(통권 84호)")
        assert issue is not None
        assert issue.date == "2023-02"
        assert issue.issue_num == 84

    def test_two_digit_month(self) -> None:
        issue = parse_issue_header("2020년 11월호(통권59호) 목차")
        assert issue is not None
        assert issue.date == "2020-11"
        assert issue.label == "2020년 11월호"

    def test_inaugural_issue(self) -> None:
        issue = parse_issue_header("2016년 1월호(창간호) 목차")
        assert issue is not None
        assert issue.date == "2016-01"
        assert issue.issue_num == 1

    def test_partial_line_is_not_a_header(self) -> None:
        assert parse_issue_header("참고: 2021년 2월호(통권61호) 목차 안내") is None

    def test_plain_line(self) -> None:
        assert parse_issue_header("1. 미얀마 군부 쿠데타 선언") is None

    @pytest.mark.parametrize("line", [
        "2021년 13월호(통권70호) 목차",
        "2021년 0월호(통권70호)",
        "2021년 2월호(통권0호) 목차",
        "0000년 1월호(창간호) 목차",
    ])
    def test_impossible_header_rejected(
        self, line: str, caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="timeline.issues"):
            assert parse_issue_header(line) is None
        assert "invalid month or number" in caplog.text

    def test_is_valid_issue(self) -> None:
        assert is_valid_issue("2021", "12", 1)
        assert not is_valid_issue("2021", "13", 1)
        assert not is_valid_issue(2021, 2, 0)


class TestMakeIssue:
    def test_pads_date_keeps_label(self) -> None:
        issue = make_issue(2021, 3, 62)
        assert issue.date == "2021-03"
        assert issue.label == "2021년 3월호"


class TestSegmentIssues:
    def test_groups_lines_per_issue(self) -> None:
        lines = [
            "표지",
            "2021년 2월호(통권61호) 목차",
            "1. 첫 기사",
            "2. 둘째 기사",
            "2021년 3월호(통권62호)",
            "1. 셋째 기사",
        ]
        groups = segment_issues(lines)
        assert [issue.issue_num for issue, _ in groups] == [61, 62]
        assert groups[0][1] == ["1. 첫 기사", "2. 둘째 기사"]
        assert groups[1][1] == ["1. 셋째 기사"]

    def test_lines_before_first_header_discarded(self) -> None:
        groups = segment_issues(["머리말", "2021년 2월호(통권61호) 목차"])
        assert len(groups) == 1
        assert groups[0][1] == []

    def test_lines_under_rejected_header_discarded(self) -> None:
        lines = [
            "2021년 2월호(통권61호) 목차",
            "1. 첫 기사",
            "2021년 13월호(통권70호) 목차",
            "1. 잘못된 호의 기사",
            "2021년 3월호(통권62호)",
            "1. 셋째 기사",
        ]
        groups = segment_issues(lines)
        assert [issue.issue_num for issue, _ in groups] == [61, 62]
        assert groups[0][1] == ["1. 첫 기사"]
        assert groups[1][1] == ["1. 셋째 기사"]

    def test_no_headers_yields_no_issues(self) -> None:
        assert segment_issues(["1. 기사", "2. 기사"]) == []

    def test_empty_input(self) -> None:
        assert segment_issues([]) == []
