import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from jobtolk.database import get_db
from jobtolk.models.profile import Profile
from jobtolk.schemas.profile import ProfileCreate, ProfileResponse, ProfileUpdate

router = APIRouter(prefix="/profiles", tags=["profiles"])


def profile_to_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        user_id=profile.user_id,
        username=profile.username,
        full_name=profile.full_name,
        bio=profile.bio,
        company_name=profile.company_name,
        avatar_url=profile.avatar_url,
        account_type=profile.account_type,
        service_type=profile.service_type,
        location_city=profile.location_city,
        skills=profile.skills or [],
        service_categories=profile.service_categories or [],
        onboarding_completed=profile.onboarding_completed,
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


@router.post("", response_model=ProfileResponse, status_code=201)
async def create_profile(req: ProfileCreate, db: Session = Depends(get_db)):
    existing = db.query(Profile).filter(Profile.user_id == req.user_id).first()
    if existing:
        raise HTTPException(status_code=409, detail="Profile already exists")

    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    profile = Profile(
        id=str(uuid.uuid4()),
        created_at=now,
        updated_at=now,
        **req.model_dump(),
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile_to_response(profile)


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_profile(profile_id: str, db: Session = Depends(get_db)):
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile_to_response(profile)


@router.put("/{profile_id}", response_model=ProfileResponse)
async def update_profile(profile_id: str, req: ProfileUpdate, db: Session = Depends(get_db)):
    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")

    update_data = req.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(profile, key, value)
    profile.updated_at = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    db.commit()
    db.refresh(profile)
    return profile_to_response(profile)
