"""
Pydantic schemas for the reference data and analysis results.

Drug and rule records are immutable snapshots: the analysis functions receive
them as arguments and build new result objects, they never modify them.
"""
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, model_validator
from typing import Optional, List, Any

from pharmref.constants import (
    HepaticGrade, RenalGrade, HepaticStage, RenalStage,
    HepaticPattern, RenalPattern, AlertLevel, AlertCategory, RiskLevel,
    LEGACY_ALERT_LEVELS, LEGACY_COMBINATION_RULE_IDS,
)


class FrozenModel(BaseModel):
    """Base for immutable records."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# Drug Schemas
class Hepatotoxicity(FrozenModel):
    """Liver toxicity record, required on every drug."""
    grade: HepaticGrade
    pattern: HepaticPattern
    mechanism: str = ""
    dose_dependent: bool = False


class Nephrotoxicity(FrozenModel):
    """Kidney toxicity record, optional per drug."""
    grade: RenalGrade
    pattern: RenalPattern
    mechanism: str = ""
    dose_dependent: bool = False
    dialyzable: Optional[bool] = Field(None, description="None when unknown")


class CirrhosisDosing(FrozenModel):
    """Dosing text per Child-Pugh class. Normal function is not stored."""
    child_A: str = ""
    child_B: str = ""
    child_C: str = ""


class RenalDosing(FrozenModel):
    """Dosing text per CKD stage, including normal function."""
    gfr_90_plus: str = ""
    gfr_60_89: str = ""
    gfr_45_59: str = ""
    gfr_30_44: str = ""
    gfr_15_29: str = ""
    gfr_below_15: str = ""
    dialysis: str = ""


class Drug(FrozenModel):
    """A drug reference record."""
    id: str = Field(..., min_length=1)
    name_en: str
    name_local: str = Field("", validation_alias=AliasChoices("name_local", "name_kr"))
    brand_names_local: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("brand_names_local", "brand_names_kr"),
    )
    brand_names_en: List[str] = Field(default_factory=list)
    drug_class: str = ""
    drug_class_en: Optional[str] = None
    hepatotoxicity: Hepatotoxicity
    cirrhosis_dosing: CirrhosisDosing = Field(default_factory=CirrhosisDosing)
    clinical_pearls: List[str] = Field(default_factory=list)
    nephrotoxicity: Optional[Nephrotoxicity] = None
    renal_dosing: Optional[RenalDosing] = None
    renal_clinical_pearls: List[str] = Field(default_factory=list)


# Alert Schemas
class AlertRule(FrozenModel):
    """
    Declarative notice rule.

    Every predicate is optional. A rule that sets none of them triggers for
    any non-empty selection.
    """
    id: str = Field(..., min_length=1)
    condition: str = ""
    alert_level: AlertLevel
    alert_category: AlertCategory = AlertCategory.HEPATO
    title: str
    message: str
    icon: str = "info"
    required_drugs: List[str] = Field(default_factory=list)
    required_drug_classes: List[str] = Field(default_factory=list)
    required_child_pugh: List[HepaticStage] = Field(default_factory=list)
    required_ckd_stage: List[RenalStage] = Field(default_factory=list)
    min_grade_a_drugs: Optional[int] = None
    min_grade_n1_drugs: Optional[int] = None
    requires_all_drugs: bool = False

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_fields(cls, data: Any) -> Any:
        """Accept older rule exports: clinical level names, no requires_all_drugs."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        level = data.get("alert_level")
        if isinstance(level, str) and level in LEGACY_ALERT_LEVELS:
            data["alert_level"] = LEGACY_ALERT_LEVELS[level]
        if data.get("requires_all_drugs") is None:
            data["requires_all_drugs"] = data.get("id") in LEGACY_COMBINATION_RULE_IDS
        for key in ("required_drugs", "required_drug_classes",
                    "required_child_pugh", "required_ckd_stage"):
            if data.get(key) is None:
                data.pop(key, None)
        return data


class TriggeredAlert(AlertRule):
    """A rule that fired, with the drug ids that caused it."""
    triggered_by: List[str] = Field(default_factory=list)


# Analysis Schemas
class DosingGuidance(FrozenModel):
    """Dosing guidance for one drug at one stage."""
    dose: str
    recommendation: str = ""
    caution: Optional[str] = None


class DrugAnalysis(FrozenModel):
    """Per-drug analysis for both axes."""
    drug: Drug
    risk_level: RiskLevel
    dosing: Optional[DosingGuidance]
    warnings: List[str] = Field(default_factory=list)
    renal_risk_level: RiskLevel = RiskLevel.UNKNOWN
    renal_dosing: Optional[DosingGuidance] = None
    renal_warnings: List[str] = Field(default_factory=list)


class AnalysisSummary(FrozenModel):
    """Grade tallies for the whole selection."""
    total_drugs: int = 0
    grade_a_count: int = 0
    grade_b_count: int = 0
    grade_c_count: int = 0
    grade_d_count: int = 0
    grade_e_count: int = 0
    grade_n1_count: int = 0
    grade_n2_count: int = 0
    grade_n3_count: int = 0
    grade_n4_count: int = 0
    grade_n5_count: int = 0


class AnalysisResult(FrozenModel):
    """Combined analysis consumed by presentation."""
    drugs: List[DrugAnalysis] = Field(default_factory=list)
    risk_score: int = Field(0, ge=0, le=100)
    renal_risk_score: int = Field(0, ge=0, le=100)
    alerts: List[TriggeredAlert] = Field(default_factory=list)
    summary: AnalysisSummary = Field(default_factory=AnalysisSummary)
    hepatic_relevant_count: int = 0
    renal_relevant_count: int = 0


# Store Schemas
class DataBundle(BaseModel):
    """Export/import payload of the reference store."""
    drugs: List[Drug] = Field(default_factory=list)
    alerts: List[AlertRule] = Field(default_factory=list)
