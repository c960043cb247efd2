"""Core domain models for occupations, programs and outlooks.

This module defines the data structures used throughout the application:
- OccupationRef: NOC code and occupation title identifying a unit group
- RequirementDocument: the "Employment requirements" text of one unit group
- UnitGroup: a NOC unit group as loaded from the data files
- Program: a post-secondary program with its credential and search keywords
- JobRef: an example job title belonging to a unit group
- Outlook: employment outlook for a NOC code
- OccupationOutlook: a matched occupation enriched with its outlook
"""

from typing import Any, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from career_outlooks.utils.text import split_keywords

OUTLOOK_LABELS = {
    0: "Undetermined",
    1: "Limited",
    2: "Fair",
    3: "Good",
}


def _coerce_code(value: Any) -> Any:
    """NOC codes arrive as ints in some data files; keep them as strings."""
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _require_text(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("Field cannot be empty or whitespace-only")
    return value.strip()


class OccupationRef(BaseModel):
    """Identity of a NOC unit group."""

    noc: str = Field(..., description="NOC unit group code")
    occupation: str = Field(..., description="Unit group occupation title")

    @field_validator("noc", mode="before")
    @classmethod
    def coerce_noc(cls, v: Any) -> Any:
        return _coerce_code(v)

    @field_validator("noc", "occupation")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string fields."""
        return _require_text(v)

    model_config = {"frozen": True}


class RequirementDocument(BaseModel):
    """One occupation's "Employment requirements" record.

    Accepts either ``{"unit_group": {"noc", "occupation"}, "items": [...]}`` or
    the flat form ``{"noc", "occupation", "items"}``. Items keep their
    original text and order.
    """

    unit_group: OccupationRef = Field(..., description="Owning occupation")
    items: Tuple[str, ...] = Field(..., description="Requirement text items, in order")

    @model_validator(mode="before")
    @classmethod
    def lift_flat_reference(cls, data: Any) -> Any:
        if isinstance(data, dict) and "unit_group" not in data and "noc" in data:
            data = dict(data)
            data["unit_group"] = {
                "noc": data.pop("noc"),
                "occupation": data.pop("occupation", None),
            }
        return data

    @property
    def noc(self) -> str:
        return self.unit_group.noc

    @property
    def occupation(self) -> str:
        return self.unit_group.occupation

    model_config = {"frozen": True}


class UnitGroup(BaseModel):
    """A NOC unit group with requirements and example job titles."""

    noc: str = Field(..., description="NOC unit group code")
    occupation: str = Field(
        ...,
        validation_alias=AliasChoices("occupation", "title"),
        description="Unit group occupation title",
    )
    requirements: List[str] = Field(
        default_factory=list, description="Employment requirement text items"
    )
    jobs: List[str] = Field(default_factory=list, description="Example job titles")

    @field_validator("noc", mode="before")
    @classmethod
    def coerce_noc(cls, v: Any) -> Any:
        return _coerce_code(v)

    @field_validator("noc", "occupation")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string fields."""
        return _require_text(v)

    @field_validator("jobs")
    @classmethod
    def drop_blank_jobs(cls, v: List[str]) -> List[str]:
        return [job.strip() for job in v if job and job.strip()]

    @property
    def ref(self) -> OccupationRef:
        return OccupationRef(noc=self.noc, occupation=self.occupation)

    def to_document(self) -> RequirementDocument:
        """Build the RequirementDocument matched by the engine."""
        return RequirementDocument(unit_group=self.ref, items=tuple(self.requirements))

    def job_refs(self) -> List["JobRef"]:
        """Example job titles as JobRef records, in data order."""
        return [JobRef(noc=self.noc, title=title) for title in self.jobs]


class Program(BaseModel):
    """A post-secondary program.

    ``noc_search_keywords`` and ``known_noc_groups`` may be given as lists or
    as comma-separated strings.
    """

    nid: int = Field(..., gt=0, description="Program node id")
    title: str = Field(..., description="Program title")
    credential: str = Field(..., description="Credential label (degree, diploma, ...)")
    noc_search_keywords: List[str] = Field(
        default_factory=list, description="Extra search keywords for requirement matching"
    )
    known_noc_groups: List[str] = Field(
        default_factory=list, description="NOC codes known to fit this program"
    )

    @field_validator("title", "credential")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string fields."""
        return _require_text(v)

    @field_validator("noc_search_keywords", mode="before")
    @classmethod
    def split_search_keywords(cls, v: Any) -> Any:
        if v is None or v is False:
            return []
        if isinstance(v, (str, list, tuple)):
            return split_keywords(v)
        return v

    @field_validator("known_noc_groups", mode="before")
    @classmethod
    def split_known_groups(cls, v: Any) -> Any:
        if v is None or v is False:
            return []
        if isinstance(v, int):
            v = [v]
        if isinstance(v, str):
            return split_keywords(v)
        if isinstance(v, (list, tuple)):
            return split_keywords([_coerce_code(code) for code in v])
        return v

    model_config = {"json_schema_extra": {"example": {
        "nid": 1042,
        "title": "Welding Foundation",
        "credential": "certificate",
        "noc_search_keywords": ["welding", "welder"],
        "known_noc_groups": ["7237"],
    }}}


class JobRef(BaseModel):
    """An example job title within a unit group; unique by (noc, title)."""

    noc: str
    title: str

    model_config = {"frozen": True}


class Outlook(BaseModel):
    """Employment outlook for one NOC code.

    ``potential`` is on the logical scale: 0 undetermined, 1 limited, 2 fair,
    3 good.
    """

    noc: str = Field(..., description="NOC unit group code")
    potential: int = Field(..., ge=0, le=3, description="Outlook potential (0-3, 3 best)")
    outlook_verbose: str = Field("", description="Label for potential")
    title: Optional[str] = Field(None, description="Occupation title reported by the source")
    trends: Optional[str] = Field(None, description="Narrative employment trends")
    region_id: Optional[int] = Field(None, description="Economic region id")

    @field_validator("noc", mode="before")
    @classmethod
    def coerce_noc(cls, v: Any) -> Any:
        return _coerce_code(v)

    @model_validator(mode="after")
    def fill_verbose_label(self):
        if not self.outlook_verbose:
            self.outlook_verbose = OUTLOOK_LABELS[self.potential]
        return self


class OccupationOutlook(BaseModel):
    """A matched occupation together with its outlook, ready for display."""

    noc: str
    title: str
    outlook: str
    potential: int
    items: List[str] = Field(default_factory=list, description="Requirement items that matched")
