"""Pydantic models for lead records."""

from datetime import datetime
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# One spreadsheet row keyed by header; empty cells hold "".
CellValue = Union[str, int, float, datetime]
RawRow = Dict[str, CellValue]


class MappedRecord(BaseModel):
    """Normalized shape of one spreadsheet row, ready to be inserted."""

    model_config = ConfigDict(frozen=True)

    company_name: str = Field("", description="Name of the funded company")
    website_url: str = Field("", description="Company website URL")
    funding_date: str = Field("", description="Date the funding was announced")
    funding_amount: str = Field("", description="Amount raised, as shown in the source sheet")
    funding_round: str = Field("", description="Round type (e.g. 'Seed', 'Series A')")

    def to_row(self) -> Dict[str, str]:
        """Return the key/value mapping sent to the datastore."""
        return self.model_dump()


class PersistedLead(BaseModel):
    """A lead as stored in the datastore, including server-assigned fields."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Identifier assigned by the datastore")
    created_at: Optional[datetime] = Field(None, description="Insert timestamp assigned by the datastore")

    company_name: str = Field("", description="Name of the funded company")
    website_url: str = Field("", description="Company website URL")
    funding_date: str = Field("", description="Date the funding was announced")
    funding_amount: str = Field("", description="Amount raised")
    funding_round: str = Field("", description="Round type")

    # Enrichment written by an out-of-band process
    linkedin_url: str = Field("", description="Company LinkedIn page")
    score: Optional[Union[int, float]] = Field(None, description="Lead score")
    score_detail: str = Field("", description="Score ranking / explanation")
    decision_maker_data: str = Field("", description="Free-form decision maker details")
    decision_maker_linkedin: str = Field("", description="Decision maker LinkedIn profile")
    decision_maker_email: str = Field("", description="Decision maker email")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> str:
        return str(value)

    @field_validator(
        "company_name",
        "website_url",
        "funding_date",
        "funding_amount",
        "funding_round",
        "linkedin_url",
        "score_detail",
        "decision_maker_data",
        "decision_maker_linkedin",
        "decision_maker_email",
        mode="before",
    )
    @classmethod
    def _null_as_empty(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("score", mode="before")
    @classmethod
    def _blank_score(cls, value: Any) -> Any:
        if value == "":
            return None
        return value
