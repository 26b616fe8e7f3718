from dataclasses import dataclass
from typing import Any, Iterable

from jobtolk.services.match_service import NormalizedQuery, ScoreTable, score_entity

RESULT_CAP = 50


@dataclass
class ScoredEntity:
    entity: Any
    score: int | None = None


def rank(
    query: NormalizedQuery,
    entities: Iterable[Any],
    table: ScoreTable,
    limit: int = RESULT_CAP,
) -> list[ScoredEntity]:
    """
    Order entities by relevance to the query.

    An empty query skips scoring and keeps the incoming order, untruncated.
    Otherwise zero-score entities are dropped and the rest are sorted by
    descending score; ties keep their incoming order.
    """
    if query.is_empty:
        return [ScoredEntity(entity=e) for e in entities]

    scored = [ScoredEntity(entity=e, score=score_entity(query, e, table)) for e in entities]
    scored = [s for s in scored if s.score > 0]
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored[:limit]
