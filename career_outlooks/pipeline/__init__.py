"""Program search orchestration."""

from .models import ProgramSearchResult
from .runner import ProgramOutlookPipeline, build_pipeline

__all__ = ["ProgramOutlookPipeline", "ProgramSearchResult", "build_pipeline"]
