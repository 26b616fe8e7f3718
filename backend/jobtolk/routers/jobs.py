import uuid
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from jobtolk.database import get_db
from jobtolk.models.job import Job
from jobtolk.models.profile import Profile
from jobtolk.schemas.job import EmployerSummary, JobCreate, JobListResponse, JobResponse, JobUpdate

router = APIRouter(prefix="/jobs", tags=["jobs"])


def job_to_response(job: Job) -> JobResponse:
    employer = None
    if job.employer is not None:
        employer = EmployerSummary(
            username=job.employer.username,
            company_name=job.employer.company_name,
            avatar_url=job.employer.avatar_url,
        )

    return JobResponse(
        id=job.id,
        employer_id=job.employer_id,
        title=job.title,
        description=job.description,
        job_type=job.job_type,
        category=job.category,
        location=job.location,
        required_skills=job.required_skills or [],
        service_categories=job.service_categories or [],
        budget_min=job.budget_min,
        budget_max=job.budget_max,
        status=job.status,
        created_at=job.created_at,
        updated_at=job.updated_at,
        employer=employer,
    )


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(req: JobCreate, db: Session = Depends(get_db)):
    employer = db.query(Profile).filter(Profile.user_id == req.employer_id).first()
    if not employer:
        raise HTTPException(status_code=404, detail="Employer profile not found")

    now = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    job = Job(
        id=str(uuid.uuid4()),
        employer_id=req.employer_id,
        title=req.title,
        description=req.description,
        job_type=req.job_type,
        category=req.category,
        location=req.location,
        required_skills=req.required_skills,
        service_categories=req.service_categories,
        budget_min=req.budget_min,
        budget_max=req.budget_max,
        status="open",
        created_at=now,
        updated_at=now,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job_to_response(job)


@router.get("", response_model=JobListResponse)
async def list_jobs(
    employer_id: str | None = None,
    status: str | None = None,
    db: Session = Depends(get_db),
):
    query = db.query(Job)
    if employer_id:
        query = query.filter(Job.employer_id == employer_id)
    if status:
        query = query.filter(Job.status == status)

    jobs = query.order_by(Job.created_at.desc()).all()
    return JobListResponse(jobs=[job_to_response(j) for j in jobs], total=len(jobs))


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: str, db: Session = Depends(get_db)):
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job_to_response(job)


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(job_id: str, req: JobUpdate, db: Session = Depends(get_db)):
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    update_data = req.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(job, key, value)
    job.updated_at = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    db.commit()
    db.refresh(job)
    return job_to_response(job)


@router.delete("/{job_id}")
async def delete_job(job_id: str, db: Session = Depends(get_db)):
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    db.delete(job)
    db.commit()
    return {"message": "Job deleted"}
