from sqlalchemy import JSON, Boolean, Column, Text
from jobtolk.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    id = Column(Text, primary_key=True)
    user_id = Column(Text, nullable=False, unique=True)
    username = Column(Text)
    full_name = Column(Text)
    bio = Column(Text)
    company_name = Column(Text)
    avatar_url = Column(Text)
    account_type = Column(Text, nullable=False, default="freelancer")
    service_type = Column(Text)
    location_city = Column(Text)
    skills = Column(JSON, nullable=False, default=list)
    service_categories = Column(JSON, nullable=False, default=list)
    onboarding_completed = Column(Boolean, nullable=False, default=False)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)
