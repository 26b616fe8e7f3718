"""
Keyword relevance scoring for jobs and freelancer profiles.

Scores are additive integers built from a fixed rule table per entity kind.
They are only comparable within a single ranking pass.
"""
from dataclasses import dataclass

from jobtolk.schemas.search import EntityKind

MIN_WORD_LENGTH = 2


@dataclass(frozen=True)
class NormalizedQuery:
    term: str
    words: tuple[str, ...]

    @property
    def is_empty(self) -> bool:
        return not self.term


def normalize_query(raw: str | None) -> NormalizedQuery:
    """Lower-case and trim the query, then split it into matchable words."""
    term = (raw or "").lower().strip()
    words = tuple(w for w in term.split() if len(w) >= MIN_WORD_LENGTH)
    return NormalizedQuery(term=term, words=words)


@dataclass(frozen=True)
class TermRule:
    """Whole-term match over a group of fields; awards one tier at most."""
    fields: tuple[str, ...]
    exact: int
    substring: int


@dataclass(frozen=True)
class WordRule:
    field: str
    points: int


@dataclass(frozen=True)
class TagRule:
    """Match against each element of a list field."""
    field: str
    exact: int
    substring: int
    word: int


@dataclass(frozen=True)
class ScoreTable:
    terms: tuple[TermRule, ...] = ()
    words: tuple[WordRule, ...] = ()
    tags: tuple[TagRule, ...] = ()


JOB_SCORE_TABLE = ScoreTable(
    terms=(
        TermRule(fields=("title",), exact=100, substring=50),
    ),
    words=(
        WordRule("title", 20),
        WordRule("description", 5),
        WordRule("location", 10),
    ),
    tags=(
        TagRule("required_skills", exact=40, substring=30, word=15),
        TagRule("service_categories", exact=35, substring=25, word=12),
    ),
)

FREELANCER_SCORE_TABLE = ScoreTable(
    terms=(
        TermRule(fields=("full_name", "username"), exact=100, substring=50),
        TermRule(fields=("company_name",), exact=80, substring=40),
    ),
    words=(
        WordRule("full_name", 25),
        WordRule("username", 20),
        WordRule("company_name", 20),
        WordRule("bio", 5),
        WordRule("location_city", 10),
    ),
    tags=(
        TagRule("skills", exact=50, substring=30, word=15),
        TagRule("service_categories", exact=45, substring=25, word=12),
    ),
)

SCORE_TABLES = {
    EntityKind.JOBS: JOB_SCORE_TABLE,
    EntityKind.FREELANCERS: FREELANCER_SCORE_TABLE,
}


def _text(entity, field: str) -> str:
    return (getattr(entity, field, None) or "").lower()


def _tags(entity, field: str) -> list[str]:
    return [str(t).lower() for t in (getattr(entity, field, None) or [])]


def score_entity(query: NormalizedQuery, entity, table: ScoreTable) -> int:
    """
    Score one entity against a normalized query.

    Works on anything exposing the table's fields as attributes (ORM rows or
    response schemas). Returns 0 for an empty query.
    """
    if query.is_empty:
        return 0
    term = query.term
    score = 0

    for rule in table.terms:
        values = [_text(entity, f) for f in rule.fields]
        if any(v == term for v in values):
            score += rule.exact
        elif any(term in v for v in values):
            score += rule.substring

    for word in query.words:
        for rule in table.words:
            if word in _text(entity, rule.field):
                score += rule.points

    for rule in table.tags:
        for tag in _tags(entity, rule.field):
            if tag == term:
                score += rule.exact
            elif term in tag:
                score += rule.substring
            score += rule.word * sum(1 for word in query.words if word in tag)

    return score
