import json
import logging

from sqlalchemy import String, cast, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from jobtolk.config import settings
from jobtolk.models.job import Job
from jobtolk.models.profile import Profile
from jobtolk.schemas.search import EntityKind, SearchFilters

logger = logging.getLogger(__name__)

SERVICE_TYPES = ("remote", "local")


class FetchFailure(Exception):
    """The coarse filter query could not be executed against the store."""


def _overlaps(column, values: list[str]):
    # List columns are stored as JSON text; match any element exactly, ignoring case.
    # Wildcards in user input match literally.
    stored = cast(column, String)
    return or_(*(stored.icontains(json.dumps(v), autoescape=True) for v in values))


def _job_query(db: Session, filters: SearchFilters):
    query = db.query(Job).filter(Job.status == "open")

    term = filters.query.lower().strip()
    if term:
        query = query.filter(
            Job.title.icontains(term, autoescape=True)
            | Job.description.icontains(term, autoescape=True)
            | Job.location.icontains(term, autoescape=True)
            | Job.category.icontains(term, autoescape=True)
        )
    if filters.category:
        query = query.filter(Job.category == filters.category)
    if filters.job_type:
        query = query.filter(Job.job_type == filters.job_type)
    if filters.budget_min:
        query = query.filter(Job.budget_min >= filters.budget_min)
    if filters.budget_max:
        query = query.filter(Job.budget_max <= filters.budget_max)
    if filters.location:
        query = query.filter(Job.location.icontains(filters.location, autoescape=True))

    return query.order_by(Job.created_at.desc())


def _freelancer_query(db: Session, filters: SearchFilters):
    query = db.query(Profile).filter(Profile.onboarding_completed.is_(True))

    term = filters.query.lower().strip()
    if term:
        query = query.filter(
            Profile.full_name.icontains(term, autoescape=True)
            | Profile.username.icontains(term, autoescape=True)
            | Profile.bio.icontains(term, autoescape=True)
            | Profile.company_name.icontains(term, autoescape=True)
            | Profile.location_city.icontains(term, autoescape=True)
        )
    if filters.skills:
        query = query.filter(_overlaps(Profile.skills, filters.skills))
    if filters.service_type in SERVICE_TYPES:
        query = query.filter(Profile.service_type == filters.service_type)
    if filters.service_categories:
        query = query.filter(_overlaps(Profile.service_categories, filters.service_categories))
    if filters.location:
        query = query.filter(Profile.location_city.icontains(filters.location, autoescape=True))

    return query.order_by(Profile.created_at.desc())


def fetch_entities(
    db: Session,
    filters: SearchFilters,
    kind: EntityKind,
    limit: int | None = None,
) -> list:
    """Run the structured store query for one entity kind, newest first."""
    limit = limit or settings.coarse_fetch_limit
    if kind == EntityKind.JOBS:
        query = _job_query(db, filters)
    else:
        query = _freelancer_query(db, filters)
    try:
        return query.limit(limit).all()
    except SQLAlchemyError as exc:
        db.rollback()
        raise FetchFailure(f"Could not fetch {kind.value}") from exc
