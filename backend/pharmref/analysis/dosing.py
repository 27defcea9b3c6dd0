"""
Dosing guidance lookup.

Maps (drug, stage) to guidance text on two independent axes:
- hepatic, keyed by Child-Pugh class (normal guidance is synthesized)
- renal, keyed by CKD stage (normal guidance comes from the stored table)

Missing data is returned as None or as placeholder text, never raised.
"""
from typing import Optional, Union

from pharmref.constants import (
    Axis, HepaticGrade, HepaticStage, RenalGrade, RenalStage,
    CONTRAINDICATION_MARKERS, DosingText,
)
from pharmref.schemas import Drug, DosingGuidance


RENAL_DOSING_COLUMNS = {
    RenalStage.NORMAL: "gfr_90_plus",
    RenalStage.G2: "gfr_60_89",
    RenalStage.G3A: "gfr_45_59",
    RenalStage.G3B: "gfr_30_44",
    RenalStage.G4: "gfr_15_29",
    RenalStage.G5: "gfr_below_15",
    RenalStage.DIALYSIS: "dialysis",
}

HEPATIC_DOSING_COLUMNS = {
    HepaticStage.A: "child_A",
    HepaticStage.B: "child_B",
    HepaticStage.C: "child_C",
}


def has_contraindication_marker(text: Optional[str]) -> bool:
    """True when dosing text says the drug is contraindicated or to be avoided."""
    if not text:
        return False
    lowered = text.lower()
    return any(marker in lowered for marker in CONTRAINDICATION_MARKERS)


def get_hepatic_dosing(drug: Drug, stage: HepaticStage) -> DosingGuidance:
    """
    Dosing guidance for a Child-Pugh class.

    Normal function always yields the synthesized standard-dose guidance.
    Other classes return the stored free text with an empty recommendation.
    """
    stage = HepaticStage(stage)
    if stage == HepaticStage.NORMAL:
        high_grade = drug.hepatotoxicity.grade in (HepaticGrade.A, HepaticGrade.B)
        return DosingGuidance(
            dose=DosingText.STANDARD_DOSE,
            recommendation=DosingText.HEPATIC_NORMAL,
            caution=DosingText.HEPATIC_NORMAL_CAUTION if high_grade else None,
        )

    column = HEPATIC_DOSING_COLUMNS[stage]
    return DosingGuidance(
        dose=getattr(drug.cirrhosis_dosing, column),
        recommendation="",
    )


def get_renal_dosing(drug: Drug, stage: RenalStage) -> Optional[DosingGuidance]:
    """
    Dosing guidance for a CKD stage.

    Returns None when the drug has no nephrotoxicity record or no renal
    dosing table; there is no synthesized default on this axis.
    """
    stage = RenalStage(stage)
    if drug.nephrotoxicity is None or drug.renal_dosing is None:
        return None

    if stage == RenalStage.NORMAL:
        high_grade = drug.nephrotoxicity.grade in (RenalGrade.N1, RenalGrade.N2)
        return DosingGuidance(
            dose=drug.renal_dosing.gfr_90_plus or DosingText.STANDARD_DOSE,
            recommendation=DosingText.RENAL_NORMAL,
            caution=DosingText.RENAL_NORMAL_CAUTION if high_grade else None,
        )

    dose = getattr(drug.renal_dosing, RENAL_DOSING_COLUMNS[stage]) or DosingText.NO_INFORMATION
    caution = None
    if has_contraindication_marker(dose):
        caution = DosingText.RENAL_STAGE_CAUTION.format(stage=stage.value)

    return DosingGuidance(dose=dose, recommendation="", caution=caution)


def resolve_dosing(
    drug: Drug,
    axis: Axis,
    stage: Union[HepaticStage, RenalStage],
) -> Optional[DosingGuidance]:
    """Dispatch to the axis-specific lookup."""
    if axis == Axis.HEPATO:
        return get_hepatic_dosing(drug, HepaticStage(stage))
    return get_renal_dosing(drug, RenalStage(stage))
