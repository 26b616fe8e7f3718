from typing import Literal

from pydantic import BaseModel


class ProfileCreate(BaseModel):
    user_id: str
    username: str | None = None
    full_name: str | None = None
    bio: str | None = None
    company_name: str | None = None
    avatar_url: str | None = None
    account_type: Literal["freelancer", "employer"] = "freelancer"
    service_type: Literal["remote", "local"] | None = None
    location_city: str | None = None
    skills: list[str] = []
    service_categories: list[str] = []
    onboarding_completed: bool = False


class ProfileUpdate(BaseModel):
    username: str | None = None
    full_name: str | None = None
    bio: str | None = None
    company_name: str | None = None
    avatar_url: str | None = None
    service_type: Literal["remote", "local"] | None = None
    location_city: str | None = None
    skills: list[str] | None = None
    service_categories: list[str] | None = None
    onboarding_completed: bool | None = None


class ProfileResponse(BaseModel):
    id: str
    user_id: str
    username: str | None
    full_name: str | None
    bio: str | None
    company_name: str | None
    avatar_url: str | None
    account_type: str
    service_type: str | None
    location_city: str | None
    skills: list[str] = []
    service_categories: list[str] = []
    onboarding_completed: bool
    created_at: str
    updated_at: str
