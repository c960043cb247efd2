"""Pipeline orchestration for program outlook searches."""

from typing import Iterable, List, Optional, Sequence, Tuple, Union
from uuid import uuid4

from career_outlooks.config.environment import EnvironmentConfig
from career_outlooks.config.models import AppConfig
from career_outlooks.data.loader import ProgramCatalog, load_programs, load_unit_groups
from career_outlooks.domain.models import JobRef, Program, RequirementDocument, UnitGroup
from career_outlooks.logging import get_logger
from career_outlooks.logging.context import log_context
from career_outlooks.matching.engine import RequirementMatcher
from career_outlooks.matching.expander import CredentialExpander
from career_outlooks.matching.models import MatchResult
from career_outlooks.matching.pairs import build_search_terms, generate_pairs
from career_outlooks.outlooks.factory import get_outlook_provider
from career_outlooks.outlooks.service import OutlookService
from career_outlooks.utils.text import split_keywords
from career_outlooks.utils.timestamps import utc_now

from .models import ProgramSearchResult

logger = get_logger(__name__, component="pipeline")


class JobCollector:
    """Ordered set of JobRef; the first occurrence of each (noc, title) wins."""

    def __init__(self) -> None:
        self._jobs: List[JobRef] = []
        self._seen = set()

    def add(self, jobs: Iterable[JobRef]) -> int:
        """Add jobs not already collected; return how many were new."""
        added = 0
        for job in jobs:
            if job not in self._seen:
                self._seen.add(job)
                self._jobs.append(job)
                added += 1
        return added

    @property
    def jobs(self) -> List[JobRef]:
        return list(self._jobs)


class ProgramOutlookPipeline:
    """
    Finds occupations and outlooks for programs.

    For a program, three passes collect example job titles:
    1. Requirement matching on the program's NOC search keywords
    2. Unit groups listed as known NOC groups for the program
    3. Requirement matching on the program title
    Matched occupations for title and keywords together are then enriched
    with their employment outlook.
    """

    def __init__(
        self,
        unit_groups: Sequence[UnitGroup],
        catalog: ProgramCatalog,
        outlook_service: OutlookService,
        matcher: Optional[RequirementMatcher] = None,
        expander: Optional[CredentialExpander] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            unit_groups: NOC unit groups to search
            catalog: Programs indexed by nid
            outlook_service: Service attaching outlooks to matches
            matcher: Requirement matcher (defaults to the standard exclusion rule)
            expander: Credential expander (defaults to the built-in synonym table)
        """
        self.unit_groups = list(unit_groups)
        self.catalog = catalog
        self.outlook_service = outlook_service
        self.matcher = matcher or RequirementMatcher()
        self.expander = expander or CredentialExpander()

        self._documents: List[RequirementDocument] = [group.to_document() for group in self.unit_groups]
        self._nocs = {group.noc for group in self.unit_groups}

    def search(self, credential: str, keywords: Union[str, Iterable[str]]) -> List[MatchResult]:
        """Match unit group requirements against a credential and keywords.

        Args:
            credential: Credential label
            keywords: Search keywords, as a list or comma-separated string

        Returns:
            Matching requirement documents in data order

        Raises:
            InvalidCredentialError: If the credential is not recognized
        """
        return [match for _, match in self._match_groups(credential, keywords)]

    def _match_groups(
        self, credential: str, keywords: Union[str, Iterable[str]]
    ) -> List[Tuple[UnitGroup, MatchResult]]:
        """Match each unit group separately, keeping the group with its result."""
        terms = split_keywords(keywords)
        pairs = generate_pairs(self.expander.expand(credential), terms)

        matched = []
        for group, document in zip(self.unit_groups, self._documents):
            matched.extend((group, result) for result in self.matcher.match([document], pairs))

        logger.debug(
            f"Generated {len(pairs)} search combinations",
            extra={
                "event": "pipeline.search.completed",
                "credential": credential,
                "term_count": len(terms),
                "pair_count": len(pairs),
                "match_count": len(matched),
            },
        )
        return matched

    def run_for_program(self, nid: Union[int, str]) -> ProgramSearchResult:
        """
        Collect jobs, matches and outlooks for one program.

        Args:
            nid: Program id (int or numeric string)

        Returns:
            ProgramSearchResult for the program

        Raises:
            InvalidProgramIdError: If nid is malformed
            ProgramNotFoundError: If the program does not exist
            InvalidCredentialError: If the program's credential is not recognized
        """
        program = self.catalog.get(nid)
        run_started_at = utc_now()
        run_id = uuid4().hex

        with log_context(run_id=run_id, program_nid=program.nid, credential=program.credential):
            logger.info(
                f"Processing program: {program.title}",
                extra={"event": "pipeline.program.started"},
            )

            collector = JobCollector()

            keyword_job_count = 0
            if program.noc_search_keywords:
                keyword_matches = self._match_groups(program.credential, program.noc_search_keywords)
                keyword_job_count = collector.add(self._jobs_for(keyword_matches))

            known_group_job_count = collector.add(self._known_group_jobs(program))

            title_matches = self._match_groups(program.credential, [program.title])
            title_job_count = collector.add(self._jobs_for(title_matches))

            search_terms = build_search_terms(program)
            pair_count = len(self.expander.expand(program.credential)) * len(search_terms)
            matches = self.search(program.credential, search_terms)
            outlooks = self.outlook_service.enrich(matches)

            result = ProgramSearchResult(
                run_id=run_id,
                program=program,
                run_started_at=run_started_at,
                run_finished_at=utc_now(),
                jobs=collector.jobs,
                matches=matches,
                outlooks=outlooks,
                pair_count=pair_count,
                keyword_job_count=keyword_job_count,
                known_group_job_count=known_group_job_count,
                title_job_count=title_job_count,
            )

            if not result.has_results:
                logger.info(
                    "Program search found no results",
                    extra={"event": "pipeline.program.no_results"},
                )

            logger.info(
                "Program search completed",
                extra={
                    "event": "pipeline.program.completed",
                    "duration_ms": int(result.duration_seconds * 1000),
                    "pair_count": pair_count,
                    "match_count": len(matches),
                    "outlook_count": len(outlooks),
                    "job_count": len(result.jobs),
                    "keyword_job_count": keyword_job_count,
                    "known_group_job_count": known_group_job_count,
                    "title_job_count": title_job_count,
                },
            )

            return result

    @staticmethod
    def _jobs_for(matched: Iterable[Tuple[UnitGroup, MatchResult]]) -> List[JobRef]:
        return [job for group, _ in matched for job in group.job_refs()]

    def _known_group_jobs(self, program: Program) -> List[JobRef]:
        known = set(program.known_noc_groups)
        jobs = []
        for group in self.unit_groups:
            if group.noc in known:
                jobs.extend(group.job_refs())

        missing = known - self._nocs
        if missing:
            logger.warning(
                "Known NOC groups not present in unit group data",
                extra={"event": "pipeline.known_groups.missing", "nocs": sorted(missing)},
            )
        return jobs


def build_pipeline(app_config: AppConfig, env_config: EnvironmentConfig) -> ProgramOutlookPipeline:
    """Load data files and wire a pipeline from configuration.

    Raises:
        DataLoadError: If a data file cannot be loaded
        ConfigurationError: If the outlook provider settings are incomplete
    """
    unit_groups = load_unit_groups(app_config.data.unit_groups_path)
    catalog = ProgramCatalog(load_programs(app_config.data.programs_path))
    provider = get_outlook_provider(app_config, env_config)

    logger.info(
        "Data loaded",
        extra={
            "event": "data.loaded",
            "unit_group_count": len(unit_groups),
            "program_count": len(catalog),
            "outlook_source": app_config.outlooks.source,
        },
    )

    return ProgramOutlookPipeline(
        unit_groups=unit_groups,
        catalog=catalog,
        outlook_service=OutlookService(provider),
        matcher=RequirementMatcher(app_config.matching.exclusion_phrases),
        expander=CredentialExpander(overrides=app_config.matching.credential_synonyms),
    )
