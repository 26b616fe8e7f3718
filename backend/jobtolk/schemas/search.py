from enum import Enum

from pydantic import BaseModel

from jobtolk.schemas.job import JobResponse
from jobtolk.schemas.profile import ProfileResponse


class EntityKind(str, Enum):
    JOBS = "jobs"
    FREELANCERS = "freelancers"


class SearchFilters(BaseModel):
    query: str = ""
    category: str | None = None
    job_type: str | None = None
    service_type: str | None = None
    budget_min: float | None = None
    budget_max: float | None = None
    location: str | None = None
    skills: list[str] = []
    service_categories: list[str] = []


class JobHit(BaseModel):
    score: int | None  # None when the query was empty and scoring was skipped
    item: JobResponse


class FreelancerHit(BaseModel):
    score: int | None
    item: ProfileResponse


class JobSearchResponse(BaseModel):
    query: str
    kind: EntityKind = EntityKind.JOBS
    total: int
    results: list[JobHit]
    error: str | None = None


class FreelancerSearchResponse(BaseModel):
    query: str
    kind: EntityKind = EntityKind.FREELANCERS
    total: int
    results: list[FreelancerHit]
    error: str | None = None
