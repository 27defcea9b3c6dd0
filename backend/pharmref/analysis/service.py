"""
Toxicity Analysis Service.

Composes dosing lookup, risk scoring and alert evaluation into the combined
per-drug and aggregate result consumed by presentation. Every call works on
the snapshot it is given and recomputes from scratch.
"""
from typing import List, Optional, Sequence
import logging

from pharmref.constants import (
    Axis, HepaticGrade, HepaticPattern, HepaticStage, RenalGrade, RenalPattern,
    RenalStage, RiskLevel, HEPATIC_GRADE_RISK, RENAL_GRADE_RISK, WarningText,
)
from pharmref.schemas import (
    AlertRule, AnalysisResult, AnalysisSummary, Drug, DrugAnalysis,
)
from pharmref.analysis.alerts import AlertEngine, get_alert_engine
from pharmref.analysis.dosing import (
    get_hepatic_dosing, get_renal_dosing, has_contraindication_marker,
)
from pharmref.analysis.scoring import count_relevant, grade_counts, score_axis

logger = logging.getLogger(__name__)


def hepatic_warnings(drug: Drug, stage: HepaticStage) -> List[str]:
    """Liver notes for one drug; the first entry is shown as primary."""
    stage = HepaticStage(stage)
    warnings: List[str] = []
    grade = drug.hepatotoxicity.grade

    if grade == HepaticGrade.A:
        warnings.append(WarningText.HEPATIC_GRADE_A)
    elif grade == HepaticGrade.B:
        warnings.append(WarningText.HEPATIC_GRADE_B)

    if stage != HepaticStage.NORMAL:
        dosing = get_hepatic_dosing(drug, stage)
        if dosing.caution:
            warnings.append(dosing.caution)
        if has_contraindication_marker(dosing.dose):
            warnings.append(WarningText.HEPATIC_AVOID.format(stage=stage.value))

    if drug.hepatotoxicity.pattern == HepaticPattern.CHOLESTATIC and stage != HepaticStage.NORMAL:
        warnings.append(WarningText.CHOLESTATIC)

    return warnings


def renal_warnings(drug: Drug, stage: RenalStage) -> List[str]:
    """Kidney notes for one drug; empty when the drug has no renal record."""
    stage = RenalStage(stage)
    warnings: List[str] = []
    nephro = drug.nephrotoxicity
    if nephro is None:
        return warnings

    if nephro.grade == RenalGrade.N1:
        warnings.append(WarningText.RENAL_GRADE_N1)
    elif nephro.grade == RenalGrade.N2:
        warnings.append(WarningText.RENAL_GRADE_N2)

    if stage != RenalStage.NORMAL:
        dosing = get_renal_dosing(drug, stage)
        if dosing is not None and has_contraindication_marker(dosing.dose):
            warnings.append(WarningText.RENAL_AVOID.format(stage=stage.value))

    if nephro.pattern == RenalPattern.HEMODYNAMIC and stage != RenalStage.NORMAL:
        warnings.append(WarningText.HEMODYNAMIC)

    if nephro.pattern == RenalPattern.ACUTE_TUBULAR_NECROSIS:
        warnings.append(WarningText.TUBULAR_NECROSIS)

    if stage == RenalStage.DIALYSIS:
        if nephro.dialyzable is False:
            warnings.append(WarningText.NOT_DIALYZABLE)
        elif nephro.dialyzable is True:
            warnings.append(WarningText.DIALYZABLE)

    return warnings


def analyze_drug(drug: Drug, hepatic_stage: HepaticStage, renal_stage: RenalStage) -> DrugAnalysis:
    """Per-drug analysis on both axes."""
    renal_risk = RiskLevel.UNKNOWN
    if drug.nephrotoxicity is not None:
        renal_risk = RENAL_GRADE_RISK[drug.nephrotoxicity.grade]

    return DrugAnalysis(
        drug=drug,
        risk_level=HEPATIC_GRADE_RISK[drug.hepatotoxicity.grade],
        dosing=get_hepatic_dosing(drug, hepatic_stage),
        warnings=hepatic_warnings(drug, hepatic_stage),
        renal_risk_level=renal_risk,
        renal_dosing=get_renal_dosing(drug, renal_stage),
        renal_warnings=renal_warnings(drug, renal_stage),
    )


def build_summary(drugs: Sequence[Drug]) -> AnalysisSummary:
    """Grade tallies for both axes."""
    hepatic = grade_counts(drugs, Axis.HEPATO)
    renal = grade_counts(drugs, Axis.RENAL)
    return AnalysisSummary(
        total_drugs=len(drugs),
        grade_a_count=hepatic[HepaticGrade.A],
        grade_b_count=hepatic[HepaticGrade.B],
        grade_c_count=hepatic[HepaticGrade.C],
        grade_d_count=hepatic[HepaticGrade.D],
        grade_e_count=hepatic[HepaticGrade.E],
        grade_n1_count=renal[RenalGrade.N1],
        grade_n2_count=renal[RenalGrade.N2],
        grade_n3_count=renal[RenalGrade.N3],
        grade_n4_count=renal[RenalGrade.N4],
        grade_n5_count=renal[RenalGrade.N5],
    )


class ToxicityAnalyzer:
    """
    Facade over the dosing, scoring and alert components.

    Stateless apart from the alert engine it delegates to; results are not
    cached so a changed selection or stage is always reflected.
    """

    def __init__(self, engine: Optional[AlertEngine] = None):
        self.engine = engine or get_alert_engine()

    def analyze(
        self,
        drugs: Sequence[Drug],
        hepatic_stage: HepaticStage,
        renal_stage: RenalStage,
        rules: Sequence[AlertRule],
    ) -> AnalysisResult:
        """
        Analyze a drug selection for the given patient stages.

        Args:
            drugs: Selected drugs, insertion order preserved
            hepatic_stage: Child-Pugh class
            renal_stage: CKD stage
            rules: Alert rule catalog

        Returns:
            AnalysisResult with per-drug analyses, both axis scores,
            triggered alerts and grade summary
        """
        hepatic_stage = HepaticStage(hepatic_stage)
        renal_stage = RenalStage(renal_stage)

        result = AnalysisResult(
            drugs=[analyze_drug(d, hepatic_stage, renal_stage) for d in drugs],
            risk_score=score_axis(drugs, hepatic_stage, Axis.HEPATO),
            renal_risk_score=score_axis(drugs, renal_stage, Axis.RENAL),
            alerts=self.engine.evaluate(drugs, hepatic_stage, renal_stage, rules),
            summary=build_summary(drugs),
            hepatic_relevant_count=count_relevant(drugs, Axis.HEPATO),
            renal_relevant_count=count_relevant(drugs, Axis.RENAL),
        )
        logger.debug(
            f"Analyzed {len(drugs)} drugs (child-pugh={hepatic_stage.value}, ckd={renal_stage.value}): "
            f"hepatic={result.risk_score} renal={result.renal_risk_score} alerts={len(result.alerts)}"
        )
        return result


_analyzer: Optional[ToxicityAnalyzer] = None


def get_analyzer() -> ToxicityAnalyzer:
    """Get singleton analyzer instance."""
    global _analyzer
    if _analyzer is None:
        _analyzer = ToxicityAnalyzer()
    return _analyzer


def analyze(
    drugs: Sequence[Drug],
    hepatic_stage: HepaticStage,
    renal_stage: RenalStage,
    rules: Sequence[AlertRule],
) -> AnalysisResult:
    """Analyze with the shared analyzer."""
    return get_analyzer().analyze(drugs, hepatic_stage, renal_stage, rules)
