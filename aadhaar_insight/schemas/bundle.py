"""
Analytics bundle Pydantic schemas.

The bundle is produced by the upstream batch job (ingestion, clustering,
Z-score anomaly detection, ALI scoring). These models are the
deserialization boundary: every optional field gets a documented default
here so the services can assume fully-populated records.

Defaults:
- missing top-level collection -> empty list
- missing or null numeric field -> 0
- NaN or infinite numeric field -> 0 (json.load accepts NaN/Infinity)
- missing or null text field -> ""
"""
import math

from pydantic import BaseModel, Field, AliasChoices, field_validator
from typing import List, Optional


def _none_as_zero(v):
    if v is None:
        return 0
    if isinstance(v, float) and not math.isfinite(v):
        return 0
    return v


def _none_as_empty(v):
    return "" if v is None else v


class BundleRecord(BaseModel):
    """Base for immutable bundle records."""

    class Config:
        frozen = True
        extra = "ignore"
        populate_by_name = True
        allow_inf_nan = False


class DistrictRecord(BundleRecord):
    """One row of the strategic matrix (district operating posture)."""
    state: str = ""
    district: str = ""
    state_code: Optional[str] = Field(None, validation_alias=AliasChoices("state_code", "stateCode"))
    district_code: Optional[str] = Field(None, validation_alias=AliasChoices("district_code", "districtCode"))
    demo_ratio: float = Field(
        0.0,
        validation_alias=AliasChoices("demo_ratio", "x_demo_ratio", "demoRatio"),
        description="Demographic update intensity, percent"
    )
    bio_ratio: float = Field(
        0.0,
        validation_alias=AliasChoices("bio_ratio", "y_bio_ratio", "bioRatio"),
        description="Biometric update intensity, percent"
    )
    enrolment_volume: int = Field(
        0,
        ge=0,
        validation_alias=AliasChoices("enrolment_volume", "z_enrolment", "enrolmentVolume")
    )
    zone: str = ""

    normalize_numeric = field_validator("demo_ratio", "bio_ratio", "enrolment_volume", mode="before")(_none_as_zero)
    normalize_text = field_validator("state", "district", "zone", mode="before")(_none_as_empty)


class ALIComponents(BundleRecord):
    """Sub-scores behind an ALI score."""
    access_gap: float = Field(0.0, validation_alias=AliasChoices("access_gap", "accessGap"))
    digital_gap: float = Field(0.0, validation_alias=AliasChoices("digital_gap", "digitalGap"))

    normalize_numeric = field_validator("access_gap", "digital_gap", mode="before")(_none_as_zero)


class ALIRecord(BundleRecord):
    """Externally scored Aadhaar inequality index for a district (0-100)."""
    district: str = ""
    state: str = ""
    ali_score: float = Field(0.0, validation_alias=AliasChoices("ali_score", "aliScore"))
    status: Optional[str] = None  # as provided upstream; tiers are re-derived
    components: ALIComponents = Field(default_factory=ALIComponents)

    normalize_numeric = field_validator("ali_score", mode="before")(_none_as_zero)
    normalize_text = field_validator("district", "state", mode="before")(_none_as_empty)

    @field_validator("components", mode="before")
    @classmethod
    def default_components(cls, v):
        return {} if v is None else v


class AnomalyRecord(BundleRecord):
    """Anomaly flagged by the upstream Z-score detector."""
    month: str = ""
    state: str = ""
    type: str = ""  # free-text classification, e.g. "Critical Spike"
    value: float = 0.0
    expected: float = 0.0  # baseline; may be zero

    normalize_numeric = field_validator("value", "expected", mode="before")(_none_as_zero)
    normalize_text = field_validator("month", "state", "type", mode="before")(_none_as_empty)


class BioComplianceRow(BundleRecord):
    """Enrolment vs biometric update volume for one state/district slice."""
    state: str = ""
    enrolment_volume: int = 0
    bio_update_volume: int = 0

    normalize_numeric = field_validator("enrolment_volume", "bio_update_volume", mode="before")(_none_as_zero)
    normalize_text = field_validator("state", mode="before")(_none_as_empty)


class EnrolmentBuckets(BundleRecord):
    """Enrolment counts by age group."""
    age_0_5: int = 0
    age_5_17: int = 0
    age_18_plus: int = 0

    normalize_numeric = field_validator("age_0_5", "age_5_17", "age_18_plus", mode="before")(_none_as_zero)


class RawDataRow(BundleRecord):
    """Per-district raw row with nested age-bucket enrolment counts."""
    state: str = ""
    district: str = ""
    enrolment: EnrolmentBuckets = Field(default_factory=EnrolmentBuckets)

    normalize_text = field_validator("state", "district", mode="before")(_none_as_empty)

    @field_validator("enrolment", mode="before")
    @classmethod
    def default_enrolment(cls, v):
        return {} if v is None else v


class AnalyticsBundle(BundleRecord):
    """The full analytics bundle consumed by the derived-metrics services."""
    strategic_matrix: List[DistrictRecord] = Field(default_factory=list)
    ali_index: List[ALIRecord] = Field(default_factory=list)
    anomalies: List[AnomalyRecord] = Field(default_factory=list)
    bio_compliance: List[BioComplianceRow] = Field(default_factory=list)
    raw_data: List[RawDataRow] = Field(default_factory=list)

    @field_validator(
        "strategic_matrix", "ali_index", "anomalies", "bio_compliance", "raw_data",
        mode="before"
    )
    @classmethod
    def none_as_empty_list(cls, v):
        return [] if v is None else v

    @property
    def record_counts(self) -> dict:
        return {
            "strategic_matrix": len(self.strategic_matrix),
            "ali_index": len(self.ali_index),
            "anomalies": len(self.anomalies),
            "bio_compliance": len(self.bio_compliance),
            "raw_data": len(self.raw_data),
        }
