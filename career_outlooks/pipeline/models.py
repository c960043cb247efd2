"""Data models for program search results and reporting."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List

from career_outlooks.domain.models import JobRef, OccupationOutlook, Program
from career_outlooks.matching.models import MatchResult
from career_outlooks.utils.text import title_case


@dataclass
class ProgramSearchResult:
    """
    Everything found for one program.

    Attributes:
        run_id: Identifier shared by all log records of this run
        program: The program searched for
        jobs: Example job titles from matched or known unit groups, without duplicates
        matches: Requirement matches for the program title and NOC keywords
        outlooks: Matched occupations that have an outlook
        pair_count: Number of credential/term pairs evaluated
        keyword_job_count: Jobs added by the NOC keyword pass
        known_group_job_count: Jobs added from known NOC groups
        title_job_count: Jobs added by the program title pass
        run_started_at: UTC timestamp when the run began
        run_finished_at: UTC timestamp when the run completed
        duration_seconds: Total time for the run
    """

    run_id: str
    program: Program
    run_started_at: datetime
    run_finished_at: datetime
    jobs: List[JobRef] = field(default_factory=list)
    matches: List[MatchResult] = field(default_factory=list)
    outlooks: List[OccupationOutlook] = field(default_factory=list)
    pair_count: int = 0
    keyword_job_count: int = 0
    known_group_job_count: int = 0
    title_job_count: int = 0
    duration_seconds: float = 0.0

    def __post_init__(self):
        if self.duration_seconds == 0.0:
            delta = self.run_finished_at - self.run_started_at
            self.duration_seconds = delta.total_seconds()

    @property
    def has_results(self) -> bool:
        return bool(self.jobs or self.outlooks)

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready form used by the CLI."""
        return {
            "program": self.program.model_dump(),
            "jobs": [{"noc": job.noc, "title": title_case(job.title)} for job in self.jobs],
            "count": len(self.outlooks),
            "results": [outlook.model_dump() for outlook in self.outlooks],
        }
