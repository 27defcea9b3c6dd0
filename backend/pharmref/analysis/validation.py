"""
Validation harness for the scoring heuristic.

Contains curated score cases and a runner that can be used in nightly
regression or unit tests. Scores must stay identical across releases, so any
failure here means the weighting changed.
"""
from typing import List, Dict, Any, Optional, Sequence

from pharmref.constants import HepaticStage, RenalStage
from pharmref.schemas import Drug
from pharmref.analysis.scoring import calculate_hepatic_score, calculate_renal_score


def make_drug(
    drug_id: str,
    hepatic_grade: str,
    renal_grade: Optional[str] = None,
    hepatic_pattern: str = "hepatocellular",
    renal_pattern: str = "mixed",
) -> Drug:
    """Minimal drug record for curated cases."""
    data: Dict[str, Any] = {
        "id": drug_id,
        "name_en": drug_id.replace("_", " ").title(),
        "hepatotoxicity": {"grade": hepatic_grade, "pattern": hepatic_pattern},
    }
    if renal_grade:
        data["nephrotoxicity"] = {"grade": renal_grade, "pattern": renal_pattern}
    return Drug.model_validate(data)


class ValidationCase:
    def __init__(
        self,
        name: str,
        drugs: Sequence[Drug],
        hepatic_stage: HepaticStage,
        renal_stage: RenalStage,
        expected_hepatic: int,
        expected_renal: int,
    ):
        self.name = name
        self.drugs = list(drugs)
        self.hepatic_stage = hepatic_stage
        self.renal_stage = renal_stage
        self.expected_hepatic = expected_hepatic
        self.expected_renal = expected_renal


# Curated cases (expand as needed)
VALIDATION_CASES: List[ValidationCase] = [
    ValidationCase(
        name="Single grade A, normal liver",
        drugs=[make_drug("drug_a", "A")],
        hepatic_stage=HepaticStage.NORMAL,
        renal_stage=RenalStage.NORMAL,
        expected_hepatic=50,
        expected_renal=0,
    ),
    ValidationCase(
        name="Two grade A, normal liver, penalty 20",
        drugs=[make_drug("drug_a1", "A"), make_drug("drug_a2", "A")],
        hepatic_stage=HepaticStage.NORMAL,
        renal_stage=RenalStage.NORMAL,
        expected_hepatic=70,
        expected_renal=0,
    ),
    ValidationCase(
        name="Two grade B, Child-Pugh A, penalty 10",
        drugs=[make_drug("drug_b1", "B"), make_drug("drug_b2", "B")],
        hepatic_stage=HepaticStage.A,
        renal_stage=RenalStage.NORMAL,
        expected_hepatic=85,
        expected_renal=0,
    ),
    ValidationCase(
        name="Grade A and E at Child-Pugh C capped at 100",
        drugs=[make_drug("drug_a", "A"), make_drug("drug_e", "E")],
        hepatic_stage=HepaticStage.C,
        renal_stage=RenalStage.NORMAL,
        expected_hepatic=100,
        expected_renal=0,
    ),
    ValidationCase(
        name="N2 at G3b rounds half up",
        drugs=[make_drug("drug_c", "C", "N2")],
        hepatic_stage=HepaticStage.NORMAL,
        renal_stage=RenalStage.G3B,
        expected_hepatic=25,
        expected_renal=98,
    ),
    ValidationCase(
        name="Drug without renal record is excluded from renal average",
        drugs=[make_drug("drug_d", "D", "N4"), make_drug("drug_a", "A")],
        hepatic_stage=HepaticStage.NORMAL,
        renal_stage=RenalStage.G2,
        expected_hepatic=31,
        expected_renal=20,
    ),
    ValidationCase(
        name="Two N1 on dialysis",
        drugs=[make_drug("drug_n1a", "E", "N1"), make_drug("drug_n1b", "E", "N1")],
        hepatic_stage=HepaticStage.NORMAL,
        renal_stage=RenalStage.DIALYSIS,
        expected_hepatic=5,
        expected_renal=100,
    ),
    ValidationCase(
        name="Mixed N3/N5 at G4",
        drugs=[make_drug("drug_n3", "E", "N3"), make_drug("drug_n5", "E", "N5")],
        hepatic_stage=HepaticStage.B,
        renal_stage=RenalStage.G4,
        expected_hepatic=15,
        expected_renal=51,
    ),
]


def run_validation() -> List[Dict[str, Any]]:
    """Run validation cases and return results."""
    results = []
    for case in VALIDATION_CASES:
        hepatic = calculate_hepatic_score(case.drugs, case.hepatic_stage)
        renal = calculate_renal_score(case.drugs, case.renal_stage)
        results.append({
            "case": case.name,
            "expected_hepatic": case.expected_hepatic,
            "got_hepatic": hepatic,
            "expected_renal": case.expected_renal,
            "got_renal": renal,
            "pass": hepatic == case.expected_hepatic and renal == case.expected_renal,
        })
    return results


if __name__ == "__main__":
    for r in run_validation():
        status = "PASS" if r["pass"] else "FAIL"
        print(
            f"[{status}] {r['case']} -> hepatic {r['got_hepatic']} (expected {r['expected_hepatic']}), "
            f"renal {r['got_renal']} (expected {r['expected_renal']})"
        )
