from sqlalchemy import JSON, Column, Float, Text
from sqlalchemy.orm import relationship
from jobtolk.database import Base


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    employer_id = Column(Text, nullable=False)
    title = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    job_type = Column(Text, nullable=False)
    category = Column(Text)
    location = Column(Text)
    required_skills = Column(JSON, nullable=False, default=list)
    service_categories = Column(JSON, nullable=False, default=list)
    budget_min = Column(Float)
    budget_max = Column(Float)
    status = Column(Text, nullable=False, default="open")
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    # Employers are profiles keyed by their auth user id, not by profile id.
    employer = relationship(
        "Profile",
        primaryjoin="foreign(Job.employer_id) == Profile.user_id",
        viewonly=True,
    )
