from jobtolk.models.profile import Profile
from jobtolk.models.job import Job

__all__ = ["Profile", "Job"]
