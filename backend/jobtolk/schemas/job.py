from typing import Literal

from pydantic import BaseModel


class JobCreate(BaseModel):
    employer_id: str
    title: str
    description: str = ""
    job_type: str
    category: str | None = None
    location: str | None = None
    required_skills: list[str] = []
    service_categories: list[str] = []
    budget_min: float | None = None
    budget_max: float | None = None


class JobUpdate(BaseModel):
    title: str | None = None
    description: str | None = None
    job_type: str | None = None
    category: str | None = None
    location: str | None = None
    required_skills: list[str] | None = None
    service_categories: list[str] | None = None
    budget_min: float | None = None
    budget_max: float | None = None
    status: Literal["open", "in_progress", "filled", "closed"] | None = None


class EmployerSummary(BaseModel):
    username: str | None
    company_name: str | None = None
    avatar_url: str | None = None


class JobResponse(BaseModel):
    id: str
    employer_id: str
    title: str
    description: str
    job_type: str
    category: str | None
    location: str | None
    required_skills: list[str] = []
    service_categories: list[str] = []
    budget_min: float | None
    budget_max: float | None
    status: str
    created_at: str
    updated_at: str
    employer: EmployerSummary | None = None


class JobListResponse(BaseModel):
    jobs: list[JobResponse]
    total: int
