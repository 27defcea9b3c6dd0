from datetime import datetime

import pytest

from pharmref.constants import AlcoholHistory, DosingText, HepaticStage, RenalStage
from pharmref.services.report import DISCLAIMER_LINES, RULE, generate_text_report
from pharmref.services.session import SessionState

GENERATED_AT = datetime(2025, 1, 15, 9, 30, 0)


@pytest.fixture
def state(drug_factory):
    isoniazid = drug_factory(
        "isoniazid",
        hepatic_grade="A",
        name_local="이소니아지드",
        cirrhosis_dosing={"child_B": "Reduce to 150 mg/day"},
    )
    gentamicin = drug_factory(
        "gentamicin",
        hepatic_grade="E",
        name_local="젠타마이신",
        nephrotoxicity={"grade": "N1", "pattern": "acute_tubular_necrosis"},
        renal_dosing={"gfr_15_29": "Extend interval to q48h"},
    )
    return SessionState(
        selected_drugs=(isoniazid, gentamicin),
        hepatic_stage=HepaticStage.B,
        renal_stage=RenalStage.G4,
        alcohol_history=AlcoholHistory.SOCIAL,
    )


@pytest.fixture
def rules(rule_factory):
    return [
        rule_factory(
            "gent_ckd", "info1",
            alert_category="renal",
            title="Aminoglycoside reference",
            required_drugs=["gentamicin"],
            required_ckd_stage=["G4"],
        ),
    ]


def test_report_header_and_conditions(state, rules):
    lines = generate_text_report(state, rules, GENERATED_AT).splitlines()

    assert lines[0] == RULE
    assert "Generated: 2025-01-15 09:30:00" in lines
    assert "- Liver function: Child-Pugh B" in lines
    assert "- Kidney function: CKD G4 (eGFR 15-29)" in lines
    assert "- Alcohol history: Social drinking" in lines


def test_report_grade_tallies(state, rules):
    lines = generate_text_report(state, rules, GENERATED_AT).splitlines()

    assert "- Drugs reviewed: 2" in lines
    assert "  - Grade A: 1" in lines
    assert "  - Grade E: 1" in lines
    assert "  - Grade N1: 1" in lines
    assert "  - Grade N2: 0" in lines


def test_report_notices(state, rules):
    report = generate_text_report(state, rules, GENERATED_AT)
    assert "[ Reference Notices ]" in report
    assert "- [Kidney] [Reference] Aminoglycoside reference" in report
    assert "  gent_ckd message" in report


def test_report_without_notices(state):
    assert "[ Reference Notices ]" not in generate_text_report(state, [], GENERATED_AT)


def test_report_per_drug_sections(state, rules):
    lines = generate_text_report(state, rules, GENERATED_AT).splitlines()

    assert "> 이소니아지드 (Isoniazid)" in lines
    assert "    Child-Pugh B: Reduce to 150 mg/day" in lines
    assert f"  [Kidney] {DosingText.NO_INFORMATION}" in lines
    assert "  [Kidney] Grade N1 (Well-known)" in lines
    assert "    Pattern: Acute tubular necrosis" in lines
    assert "    CKD G4: Extend interval to q48h" in lines


def test_report_normal_function_omits_stage_dosing(state, rules):
    normal = SessionState(selected_drugs=state.selected_drugs)
    report = generate_text_report(normal, rules, GENERATED_AT)
    assert "Child-Pugh B:" not in report
    assert "CKD G4:" not in report
    assert "- Liver function: Normal" in report


def test_report_ends_with_disclaimer(state, rules):
    lines = generate_text_report(state, rules, GENERATED_AT).splitlines()
    assert lines[-len(DISCLAIMER_LINES) - 2:] == [RULE, *DISCLAIMER_LINES, RULE]
