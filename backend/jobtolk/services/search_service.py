import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from jobtolk.schemas.search import EntityKind, SearchFilters
from jobtolk.services.coarse_filter import FetchFailure, fetch_entities
from jobtolk.services.match_service import SCORE_TABLES, normalize_query
from jobtolk.services.ranking import ScoredEntity, rank

logger = logging.getLogger(__name__)


@dataclass
class SearchOutcome:
    """Result of one search invocation"""
    kind: EntityKind
    query: str
    results: list[ScoredEntity] = field(default_factory=list)
    error: str | None = None


def rank_entities(filters: SearchFilters, entities: list, kind: EntityKind) -> list[ScoredEntity]:
    return rank(normalize_query(filters.query), entities, SCORE_TABLES[kind])


def search(db: Session, filters: SearchFilters, kind: EntityKind) -> SearchOutcome:
    """Coarse-filter the store, then rank the fetched entities against the query.

    A failed fetch is reported as an empty outcome carrying the error message;
    it is never retried.
    """
    logger.info("Search %s: query=%r", kind.value, filters.query)
    try:
        entities = fetch_entities(db, filters, kind)
    except FetchFailure as exc:
        logger.error("Error searching %s: %s", kind.value, exc.__cause__ or exc)
        return SearchOutcome(kind=kind, query=filters.query, error=str(exc))

    results = rank_entities(filters, entities, kind)
    logger.info("Search %s: %d fetched, %d ranked", kind.value, len(entities), len(results))
    return SearchOutcome(kind=kind, query=filters.query, results=results)
