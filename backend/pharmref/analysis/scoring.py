"""
Aggregate risk scoring per toxicity axis.

score = round(mean(base_score(grade) * stage_multiplier) + multi_drug_penalty),
capped at 100. The weighting is a heuristic.
"""
import math
from typing import Dict, List, Optional, Sequence, Union

from pharmref.constants import (
    Axis, HepaticGrade, HepaticStage, RenalGrade, RenalStage,
    HEPATIC_GRADE_SCORES, RENAL_GRADE_SCORES,
    HEPATIC_STAGE_MULTIPLIERS, RENAL_STAGE_MULTIPLIERS,
    PENALTY_MOST_SEVERE, PENALTY_SECOND_SEVERE, MAX_SCORE,
)
from pharmref.schemas import Drug


def _round_half_up(value: float) -> int:
    # round() would bank 0.5 to even
    return int(math.floor(value + 0.5))


def _grade(drug: Drug, axis: Axis) -> Optional[Union[HepaticGrade, RenalGrade]]:
    if axis == Axis.HEPATO:
        return drug.hepatotoxicity.grade
    return drug.nephrotoxicity.grade if drug.nephrotoxicity else None


def grade_counts(drugs: Sequence[Drug], axis: Axis) -> Dict[Union[HepaticGrade, RenalGrade], int]:
    """
    Count selected drugs per grade.

    Drugs without a record for the axis are not counted in any bucket.
    """
    grades = list(HepaticGrade) if axis == Axis.HEPATO else list(RenalGrade)
    counts = {grade: 0 for grade in grades}
    for drug in drugs:
        grade = _grade(drug, axis)
        if grade is not None:
            counts[grade] += 1
    return counts


def multi_drug_penalty(drugs: Sequence[Drug], axis: Axis) -> int:
    """+20 for more than one most-severe drug, else +10 for more than one second-most."""
    counts = grade_counts(drugs, axis)
    most_severe, second_severe = list(counts)[:2]
    if counts[most_severe] > 1:
        return PENALTY_MOST_SEVERE
    if counts[second_severe] > 1:
        return PENALTY_SECOND_SEVERE
    return 0


def score_axis(
    drugs: Sequence[Drug],
    stage: Union[HepaticStage, RenalStage],
    axis: Axis,
) -> int:
    """
    Aggregate 0-100 score for one axis.

    Only drugs with a record for the axis enter the average; the penalty is
    taken from the grade counts of the whole selection.
    """
    if axis == Axis.HEPATO:
        scores, multiplier = HEPATIC_GRADE_SCORES, HEPATIC_STAGE_MULTIPLIERS[HepaticStage(stage)]
    else:
        scores, multiplier = RENAL_GRADE_SCORES, RENAL_STAGE_MULTIPLIERS[RenalStage(stage)]

    graded: List = [g for g in (_grade(d, axis) for d in drugs) if g is not None]
    if not graded:
        return 0

    total = 0.0
    for grade in graded:
        total += scores[grade] * multiplier
    average = total / len(graded)

    return min(MAX_SCORE, _round_half_up(average + multi_drug_penalty(drugs, axis)))


def calculate_hepatic_score(drugs: Sequence[Drug], stage: HepaticStage) -> int:
    """Hepatic aggregate score."""
    return score_axis(drugs, stage, Axis.HEPATO)


def calculate_renal_score(drugs: Sequence[Drug], stage: RenalStage) -> int:
    """Renal aggregate score."""
    return score_axis(drugs, stage, Axis.RENAL)


def count_relevant(drugs: Sequence[Drug], axis: Axis) -> int:
    """Number of drugs in the two most severe grades of the axis."""
    counts = grade_counts(drugs, axis)
    return sum(list(counts.values())[:2])
