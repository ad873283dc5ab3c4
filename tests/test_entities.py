"""Tests for entity matching."""

from __future__ import annotations

from timeline.config import RuleTables
from timeline.entities import count_mentions, match_people
from timeline.models import Article, Issue


class TestMatchPeople:
    def test_commander_in_chief(self, rules: RuleTables) -> None:
        assert match_people("민 아웅 흘라잉 총사령관 방중", rules.people) == ["Min Aung Hlaing"]

    def test_several_actors_in_table_order(self, rules: RuleTables) -> None:
        people = match_people("미국, 중국 시진핑과 아세안 회의", rules.people)
        assert people == ["ASEAN", "China", "USA"]

    def test_ascii_acronym_needs_word_boundary(self, rules: RuleTables) -> None:
        assert match_people("NUG 성명 발표", rules.people) == ["NUG"]
        assert match_people("NUGGET 수출", rules.people) == []

    def test_acronyms_are_case_sensitive(self, rules: RuleTables) -> None:
        assert match_people("MAH visits Naypyitaw", rules.people) == ["Min Aung Hlaing"]
        assert match_people("Mah Jong club opens", rules.people) == []
        assert match_people("nug of gold", rules.people) == []

    def test_no_match(self, rules: RuleTables) -> None:
        assert match_people("양곤 환율 동향", rules.people) == []


class TestCountMentions:
    def test_counts_per_article(self) -> None:
        issues = [
            Issue(date="2021-02", label="2021년 2월호", issue_num=61, articles=[
                Article(id="61-0", title="a", people=["China", "USA"]),
                Article(id="61-1", title="b", people=["China"]),
            ]),
            Issue(date="2021-03", label="2021년 3월호", issue_num=62, articles=[
                Article(id="62-0", title="c"),
            ]),
        ]
        assert count_mentions(issues) == {"China": 2, "USA": 1}
