import pytest

from pharmref.analysis.scoring import (
    calculate_hepatic_score, calculate_renal_score, count_relevant, grade_counts,
    multi_drug_penalty, score_axis,
)
from pharmref.analysis.validation import make_drug
from pharmref.constants import Axis, HepaticGrade, HepaticStage, RenalGrade, RenalStage


def test_single_grade_a_normal_liver():
    assert calculate_hepatic_score([make_drug("a", "A")], HepaticStage.NORMAL) == 50


def test_two_grade_a_normal_liver_gets_penalty():
    drugs = [make_drug("a1", "A"), make_drug("a2", "A")]
    assert calculate_hepatic_score(drugs, HepaticStage.NORMAL) == 70


def test_empty_selection_scores_zero():
    assert calculate_hepatic_score([], HepaticStage.C) == 0
    assert calculate_renal_score([], RenalStage.DIALYSIS) == 0


def test_no_renal_records_scores_zero():
    drugs = [make_drug("a", "A"), make_drug("b", "B")]
    assert calculate_renal_score(drugs, RenalStage.G5) == 0


def test_score_is_capped():
    drugs = [make_drug("a1", "A", "N1"), make_drug("a2", "A", "N1")]
    assert calculate_hepatic_score(drugs, HepaticStage.C) == 100
    assert calculate_renal_score(drugs, RenalStage.DIALYSIS) == 100


def test_half_rounds_up():
    # 75 * 1.3 = 97.5
    assert calculate_renal_score([make_drug("x", "E", "N2")], RenalStage.G3B) == 98


@pytest.mark.parametrize("grade", list(HepaticGrade))
def test_hepatic_score_monotonic_in_stage(grade):
    drug = make_drug("x", grade.value)
    scores = [calculate_hepatic_score([drug], stage) for stage in HepaticStage]
    assert scores == sorted(scores)


@pytest.mark.parametrize("grade", list(RenalGrade))
def test_renal_score_monotonic_in_stage(grade):
    drug = make_drug("x", "E", grade.value)
    scores = [calculate_renal_score([drug], stage) for stage in RenalStage]
    assert scores == sorted(scores)


def test_drug_without_renal_record_is_excluded_from_renal_average():
    with_renal = make_drug("n4", "D", "N4")
    without_renal = make_drug("a", "A")
    # Only the N4 drug is averaged: 25 * 0.8 = 20
    assert calculate_renal_score([with_renal, without_renal], RenalStage.G2) == 20
    # Both count on the hepatic axis: (25 + 100) * 0.5 / 2 = 31.25
    assert calculate_hepatic_score([with_renal, without_renal], HepaticStage.NORMAL) == 31


def test_grade_counts_exclude_missing_renal_records():
    drugs = [make_drug("a", "A", "N1"), make_drug("b", "A"), make_drug("c", "C", "N3")]
    assert grade_counts(drugs, Axis.HEPATO) == {
        HepaticGrade.A: 2, HepaticGrade.B: 0, HepaticGrade.C: 1, HepaticGrade.D: 0, HepaticGrade.E: 0,
    }
    renal = grade_counts(drugs, Axis.RENAL)
    assert sum(renal.values()) == 2
    assert renal[RenalGrade.N1] == 1
    assert renal[RenalGrade.N3] == 1


def test_penalty_prefers_most_severe_bucket():
    assert multi_drug_penalty([make_drug("a1", "A"), make_drug("a2", "A")], Axis.HEPATO) == 20
    assert multi_drug_penalty([make_drug("b1", "B"), make_drug("b2", "B")], Axis.HEPATO) == 10
    assert multi_drug_penalty([make_drug("a", "A"), make_drug("b", "B")], Axis.HEPATO) == 0


def test_renal_penalty_ignores_hepatic_grades():
    drugs = [make_drug("a1", "A", "N3"), make_drug("a2", "A", "N3")]
    assert multi_drug_penalty(drugs, Axis.RENAL) == 0
    assert calculate_renal_score(drugs, RenalStage.G3A) == 50


def test_score_axis_accepts_raw_stage_values():
    drug = make_drug("x", "B", "N2")
    assert score_axis([drug], "B", Axis.HEPATO) == calculate_hepatic_score([drug], HepaticStage.B)
    assert score_axis([drug], "G3a", Axis.RENAL) == calculate_renal_score([drug], RenalStage.G3A)


def test_count_relevant_uses_two_most_severe_buckets():
    drugs = [
        make_drug("a", "A", "N2"),
        make_drug("b", "B", "N3"),
        make_drug("c", "C", "N1"),
        make_drug("d", "D"),
    ]
    assert count_relevant(drugs, Axis.HEPATO) == 2
    assert count_relevant(drugs, Axis.RENAL) == 2
