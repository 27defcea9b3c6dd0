import pytest

from pharmref.analysis.scoring import calculate_hepatic_score, calculate_renal_score
from pharmref.analysis.validation import VALIDATION_CASES, run_validation


@pytest.mark.parametrize("case", VALIDATION_CASES, ids=lambda c: c.name)
def test_validation_cases(case):
    hepatic = calculate_hepatic_score(case.drugs, case.hepatic_stage)
    renal = calculate_renal_score(case.drugs, case.renal_stage)
    assert hepatic == case.expected_hepatic, f"{case.name}: expected {case.expected_hepatic}, got {hepatic}"
    assert renal == case.expected_renal, f"{case.name}: expected {case.expected_renal}, got {renal}"


def test_run_validation_reports_every_case():
    results = run_validation()
    assert len(results) == len(VALIDATION_CASES)
    assert all(r["pass"] for r in results)
