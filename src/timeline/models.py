"""Timeline records: issues and the articles they contain.

Serialized field names follow the front-end's camelCase JSON schema:
``{"issues": [{"date", "label", "issueNum", "articles", "isBackground"}]}``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

ARTICLE_TYPES = ("analysis", "news")


@dataclass
class Article:
    """One news or analysis item within an issue."""

    id: str
    title: str
    type: str = "news"
    tags: list[str] = field(default_factory=list)
    people: list[str] = field(default_factory=list)
    is_highlight: bool = False
    body: str | None = None
    title_en: str | None = None

    def __post_init__(self) -> None:
        if self.type not in ARTICLE_TYPES:
            raise ValueError(f"Unknown article type: {self.type}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary matching the dataset schema."""
        result: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "tags": list(self.tags),
            "people": list(self.people),
            "isHighlight": self.is_highlight,
        }
        if self.body is not None:
            result["body"] = self.body
        if self.title_en is not None:
            result["titleEn"] = self.title_en
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Article:
        return cls(
            id=data["id"],
            title=data["title"],
            type=data.get("type", "news"),
            tags=list(data.get("tags", [])),
            people=list(data.get("people", [])),
            is_highlight=bool(data.get("isHighlight", False)),
            body=data.get("body"),
            title_en=data.get("titleEn"),
        )


@dataclass
class Issue:
    """One monthly bulletin."""

    date: str
    label: str
    issue_num: int
    articles: list[Article] = field(default_factory=list)
    is_background: bool | None = None

    def __post_init__(self) -> None:
        # Dates must sort chronologically as plain strings.
        datetime.strptime(self.date, "%Y-%m")
        if self.issue_num < 1:
            raise ValueError(f"Issue number must be positive, got {self.issue_num}")

    def add_article(self, article: Article) -> None:
        self.articles.append(article)

    def next_article_id(self) -> str:
        """Return the id the next appended article should carry."""
        return f"{self.issue_num}-{len(self.articles)}"

    def with_articles(self, articles: list[Article], **changes: Any) -> Issue:
        """Return a copy of this issue carrying a replacement article list."""
        return Issue(
            date=self.date,
            label=self.label,
            issue_num=self.issue_num,
            articles=articles,
            is_background=changes.get("is_background", self.is_background),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary matching the dataset schema."""
        result: dict[str, Any] = {
            "date": self.date,
            "label": self.label,
            "issueNum": self.issue_num,
            "articles": [a.to_dict() for a in self.articles],
        }
        if self.is_background is not None:
            result["isBackground"] = self.is_background
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Issue:
        return cls(
            date=data["date"],
            label=data["label"],
            issue_num=int(data["issueNum"]),
            articles=[Article.from_dict(a) for a in data.get("articles", [])],
            is_background=data.get("isBackground"),
        )


def article_count(issues: list[Issue]) -> int:
    """Total number of articles across issues."""
    return sum(len(issue.articles) for issue in issues)
