"""
Job System

Catalog of hireable roles per building and rank, eligibility validation and
wage/experience arithmetic. The catalog is immutable; a JobSystem instance
is passed explicitly to the game and to the buildings that offer jobs.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from config import CONFIG
from enums import BuildingType

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Job:
    id: str
    title: str
    rank: int
    required_education: int
    required_experience: int
    required_clothes_level: int
    wage_per_hour: float
    experience_gain_per_hour: float
    building_type: BuildingType

    def __post_init__(self):
        """Validate invariants after initialization."""
        if not (0 <= self.rank <= CONFIG.jobs.max_job_rank):
            raise ValueError(f"rank must be in [0, {CONFIG.jobs.max_job_rank}], got {self.rank}")
        if self.wage_per_hour < 0:
            raise ValueError(f"wage_per_hour cannot be negative, got {self.wage_per_hour}")

    def to_dict(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "rank": self.rank,
            "requiredEducation": self.required_education,
            "requiredExperience": self.required_experience,
            "requiredClothesLevel": self.required_clothes_level,
            "wagePerHour": self.wage_per_hour,
            "experienceGainPerHour": self.experience_gain_per_hour,
            "buildingType": self.building_type.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Job":
        return cls(
            id=data["id"],
            title=data["title"],
            rank=data["rank"],
            required_education=data["requiredEducation"],
            required_experience=data["requiredExperience"],
            required_clothes_level=data["requiredClothesLevel"],
            wage_per_hour=data["wagePerHour"],
            experience_gain_per_hour=data["experienceGainPerHour"],
            building_type=BuildingType(data["buildingType"]),
        )


UNEMPLOYED_JOB_ID = "unemployed"


def _job(
    job_id: str,
    title: str,
    rank: int,
    clothes_level: int,
    wage: float,
    building_type: BuildingType,
    required_experience: Optional[int] = None,
) -> Job:
    """Build a catalog entry using the per-rank requirement convention."""
    if required_experience is None:
        required_experience = CONFIG.jobs.experience_per_rank * rank
    return Job(
        id=job_id,
        title=title,
        rank=rank,
        required_education=CONFIG.jobs.education_per_rank * rank,
        required_experience=required_experience,
        required_clothes_level=clothes_level,
        wage_per_hour=wage,
        experience_gain_per_hour=CONFIG.jobs.experience_gain_per_hour,
        building_type=building_type,
    )


_F = BuildingType.FACTORY
_R = BuildingType.RESTAURANT
_C = BuildingType.COLLEGE
_S = BuildingType.CLOTHES_STORE
_B = BuildingType.BANK

JOB_DEFINITIONS: tuple = (
    Job(UNEMPLOYED_JOB_ID, "Unemployed", 0, 0, 0, 0, 0, 0, BuildingType.EMPLOYMENT_AGENCY),
    # Factory (ranks 1-8)
    _job("factory-janitor", "Janitor", 1, 1, 6, _F),
    _job("factory-assembly-worker", "Assembly Worker", 1, 1, 7, _F),
    _job("factory-secretary", "Secretary", 2, 2, 8, _F),
    _job("factory-machinist-helper", "Machinist Helper", 3, 1, 9, _F),
    _job("factory-executive-secretary", "Executive Secretary", 4, 3, 18, _F),
    _job("factory-machinist", "Machinist", 5, 1, 19, _F),
    _job("factory-department-manager", "Department Manager", 6, 3, 21, _F),
    _job("factory-engineer", "Engineer", 7, 2, 23, _F),
    _job("factory-general-manager", "General Manager", 8, 3, 25, _F),
    # Restaurant (ranks 1-4); the cook is the only entry job with no experience needed
    _job("restaurant-cook", "Cook", 1, 1, 3, _R, required_experience=0),
    _job("restaurant-clerk", "Clerk", 2, 1, 5, _R),
    _job("restaurant-assistant-manager", "Assistant Manager", 3, 2, 7, _R),
    _job("restaurant-manager", "Manager", 4, 3, 9, _R),
    # College (ranks 1, 4, 9)
    _job("college-janitor", "Janitor", 1, 1, 6, _C),
    _job("college-teacher", "Teacher", 4, 2, 12, _C),
    _job("college-professor", "Professor", 9, 3, 27, _C),
    # Clothes store (ranks 2-4)
    _job("clothesstore-salesperson", "Salesperson", 2, 1, 6, _S),
    _job("clothesstore-assistant-manager", "Assistant Manager", 3, 2, 9, _S),
    _job("clothesstore-manager", "Manager", 4, 3, 11, _S),
    # Bank (ranks 2, 5, 7)
    _job("bank-teller", "Bank Teller", 2, 2, 10, _B),
    _job("bank-loan-officer", "Loan Officer", 5, 3, 16, _B),
    _job("bank-branch-manager", "Branch Manager", 7, 3, 22, _B),
)


@dataclass
class JobApplicationResult:
    success: bool
    message: str
    job: Optional[Job] = None
    failed_requirements: List[str] = field(default_factory=list)


class JobSystem:
    """
    Job catalog plus eligibility rules.

    Players are read through their accessors only (education, job,
    get_clothes_level, get_experience_at_rank); nothing here mutates them.
    """

    def __init__(self, jobs: Optional[List[Job]] = None):
        self._jobs: tuple = tuple(jobs) if jobs is not None else JOB_DEFINITIONS
        self._by_id: Dict[str, Job] = {job.id: job for job in self._jobs}

    def get_available_jobs(self, building_type: Optional[BuildingType] = None) -> List[Job]:
        if building_type is not None:
            return [job for job in self._jobs if job.building_type == building_type]
        return list(self._jobs)

    def get_job_by_id(self, job_id: str) -> Optional[Job]:
        return self._by_id.get(job_id)

    def get_jobs_by_rank(self, rank: int) -> List[Job]:
        return [job for job in self._jobs if job.rank == rank]

    def get_unemployed_job(self) -> Job:
        job = self._by_id.get(UNEMPLOYED_JOB_ID)
        if job is None:
            raise LookupError("Unemployed job not found in job definitions")
        return job

    def apply_for_job(self, player, job_id: str) -> JobApplicationResult:
        job = self.get_job_by_id(job_id)
        if job is None:
            return JobApplicationResult(False, f"Job with id '{job_id}' not found")

        if player.job is not None and player.job.id == job_id:
            return JobApplicationResult(False, f"You already have the {job.title} position")

        failed = self.validate_job_requirements(player, job)
        if failed:
            logger.debug(f"Application for {job.id} rejected: {failed}")
            return JobApplicationResult(
                False,
                f"You don't meet the requirements for {job.title}",
                failed_requirements=failed,
            )

        return JobApplicationResult(
            True,
            f"Congratulations! You got the job as {job.title} at {job.building_type.display_name}",
            job=job,
        )

    def quit_job(self, player) -> JobApplicationResult:
        if player.job is None or player.job.id == UNEMPLOYED_JOB_ID:
            return JobApplicationResult(False, "You are already unemployed")
        return JobApplicationResult(
            True,
            f"You quit your job as {player.job.title}. You are now unemployed.",
            job=self.get_unemployed_job(),
        )

    def validate_job_requirements(self, player, job: Job) -> List[str]:
        """Return every failed requirement; an empty list means qualified."""
        failed: List[str] = []

        if player.education < job.required_education:
            failed.append(f"Education: {player.education}/{job.required_education} required")

        if not self._meets_experience(player, job):
            failed.append(
                f"Experience: Need {job.required_experience} points at rank "
                f"{job.rank} or {max(1, job.rank - 1)}"
            )

        clothes_level = player.get_clothes_level()
        if clothes_level < job.required_clothes_level:
            failed.append(f"Clothes: Level {clothes_level}/{job.required_clothes_level} required")

        return failed

    def is_qualified(self, player, job: Job) -> bool:
        return not self.validate_job_requirements(player, job)

    @staticmethod
    def _meets_experience(player, job: Job) -> bool:
        # Experience at the job's rank or one rank below counts
        lowest = max(1, job.rank - 1)
        return any(
            player.get_experience_at_rank(rank) >= job.required_experience
            for rank in range(lowest, job.rank + 1)
        ) or job.required_experience == 0

    def calculate_wage(self, job: Job, hours: float) -> float:
        return job.wage_per_hour * hours

    def calculate_experience_gain(self, job: Job, hours: float) -> float:
        return job.experience_gain_per_hour * hours

    def get_qualified_jobs(self, player) -> List[Job]:
        return [
            job for job in self._jobs
            if job.id != UNEMPLOYED_JOB_ID and self.is_qualified(player, job)
        ]

    def get_best_qualified_job(self, player) -> Optional[Job]:
        qualified = self.get_qualified_jobs(player)
        if not qualified:
            return None
        return max(qualified, key=lambda job: job.wage_per_hour)
