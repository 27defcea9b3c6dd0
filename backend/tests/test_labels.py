import pytest

from pharmref.analysis.labels import (
    DEFAULT_ICON_NAME,
    get_alert_category_tag,
    get_alert_level_label,
    get_grade_description,
    get_grade_label,
    get_hepatic_stage_label,
    get_icon_name,
    get_pattern_label,
    get_renal_stage_label,
    get_risk_level_label,
    get_score_band,
)
from pharmref.constants import HepaticGrade, RenalGrade, RenalStage, RiskLevel


def test_grade_labels_cover_both_axes():
    assert get_grade_label(HepaticGrade.A) == "Grade A (Well-known)"
    assert get_grade_label(RenalGrade.N3) == "Grade N3 (Probable)"
    assert get_grade_label("N1") == "Grade N1 (Well-known)"
    assert get_grade_description("E") == "Liver involvement unlikely"
    assert get_grade_description(RenalGrade.N1) == "Well-known nephrotoxic drug"


def test_stage_labels():
    assert get_hepatic_stage_label("normal") == "Normal"
    assert get_hepatic_stage_label("C") == "Child-Pugh C"
    assert get_renal_stage_label(RenalStage.G3A) == "CKD G3a (eGFR 45-59)"
    assert get_renal_stage_label("dialysis", short=True) == "Dialysis"


def test_pattern_label():
    assert get_pattern_label("cholestatic") == "Cholestatic"
    assert get_pattern_label("glomerular") == "Glomerular injury"
    assert get_pattern_label("crystal") == "crystal"


def test_level_and_category():
    assert get_alert_level_label("info1") == "Reference"
    assert get_alert_level_label("info4") == "Info"
    assert get_alert_category_tag("combined") == "[Combined]"
    assert get_risk_level_label(RiskLevel.UNKNOWN) == "No information"


def test_icon_name():
    assert get_icon_name("block") == "Ban"
    assert get_icon_name("kidney") == "Activity"
    assert get_icon_name("unknown-icon") == DEFAULT_ICON_NAME


@pytest.mark.parametrize("score,band", [(0, 1), (19, 1), (20, 2), (59, 3), (60, 4), (80, 5), (100, 5)])
def test_score_band(score, band):
    assert get_score_band(score) == band
