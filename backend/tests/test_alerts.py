import pytest

from pharmref.analysis.alerts import AlertEngine, detect_alerts, matches_drug_class
from pharmref.constants import AlertLevel, HepaticStage, RenalStage
from pharmref.schemas import AlertRule


@pytest.fixture
def engine():
    return AlertEngine()


@pytest.fixture
def drugs(drug_factory):
    return {
        "meropenem": drug_factory("meropenem", hepatic_grade="E", drug_class="Carbapenem"),
        "valproic_acid": drug_factory("valproic_acid", hepatic_grade="A", drug_class="Anticonvulsant"),
        "ciprofloxacin": drug_factory("ciprofloxacin", drug_class="Fluoroquinolone"),
        "theophylline": drug_factory(
            "theophylline", hepatic_grade="E", drug_class="Bronchodilator", name_local="테오필린",
        ),
        "isoniazid": drug_factory("isoniazid", hepatic_grade="A"),
        "gentamicin": drug_factory(
            "gentamicin", hepatic_grade="E",
            nephrotoxicity={"grade": "N1", "pattern": "acute_tubular_necrosis"},
        ),
        "vancomycin": drug_factory(
            "vancomycin", hepatic_grade="E",
            nephrotoxicity={"grade": "N1", "pattern": "acute_tubular_necrosis"},
        ),
    }


def evaluate(engine, selection, rules, hepatic=HepaticStage.NORMAL, renal=RenalStage.NORMAL):
    return engine.evaluate(selection, hepatic, renal, rules)


def test_combination_rule_requires_all_drugs(engine, drugs, rule_factory):
    rule = rule_factory("meropenem_valproate", "info1", required_drugs=["meropenem", "valproic_acid"])
    assert rule.requires_all_drugs is True

    assert evaluate(engine, [drugs["meropenem"]], [rule]) == []

    alerts = evaluate(engine, [drugs["valproic_acid"], drugs["meropenem"]], [rule])
    assert len(alerts) == 1
    assert set(alerts[0].triggered_by) == {"meropenem", "valproic_acid"}


def test_explicit_requires_all_drugs_flag(engine, drugs, rule_factory):
    rule = rule_factory(
        "custom_pair", required_drugs=["vancomycin", "gentamicin"], requires_all_drugs=True,
    )
    assert evaluate(engine, [drugs["vancomycin"]], [rule]) == []
    assert len(evaluate(engine, [drugs["vancomycin"], drugs["gentamicin"]], [rule])) == 1


def test_any_of_rule_triggers_on_one_drug(engine, drugs, rule_factory):
    rule = rule_factory("any_of", required_drugs=["meropenem", "isoniazid", "gentamicin"])
    alerts = evaluate(engine, [drugs["isoniazid"]], [rule])
    assert [a.triggered_by for a in alerts] == [["isoniazid"]]


def test_vancomycin_pair_rules_stay_any_of(engine, drugs, rule_factory):
    rule = rule_factory("vancomycin_aminoglycoside", "info1", required_drugs=["vancomycin", "gentamicin"])
    assert rule.requires_all_drugs is False
    alerts = evaluate(engine, [drugs["vancomycin"]], [rule])
    assert alerts[0].triggered_by == ["vancomycin"]


def test_results_sorted_by_level_with_stable_ties(engine, drugs, rule_factory):
    rules = [
        rule_factory("r1", "info3"),
        rule_factory("r2", "info1"),
        rule_factory("r3", "info2"),
        rule_factory("r4", "info1"),
    ]
    alerts = evaluate(engine, [drugs["isoniazid"]], rules)
    assert [a.id for a in alerts] == ["r2", "r4", "r3", "r1"]
    assert [a.alert_level for a in alerts] == [
        AlertLevel.INFO1, AlertLevel.INFO1, AlertLevel.INFO2, AlertLevel.INFO3,
    ]


def test_empty_selection_never_triggers(engine, rule_factory):
    rules = [rule_factory("global_notice"), rule_factory("stage_only", required_child_pugh=["C"])]
    assert evaluate(engine, [], rules, hepatic=HepaticStage.C) == []


def test_rule_without_predicates_triggers(engine, drugs, rule_factory):
    alerts = evaluate(engine, [drugs["meropenem"]], [rule_factory("global_notice")])
    assert len(alerts) == 1
    assert alerts[0].triggered_by == []


def test_child_pugh_predicate(engine, drugs, rule_factory):
    rule = rule_factory("metronidazole_bc", required_drugs=["isoniazid"], required_child_pugh=["B", "C"])
    selection = [drugs["isoniazid"]]
    assert evaluate(engine, selection, [rule], hepatic=HepaticStage.A) == []
    assert len(evaluate(engine, selection, [rule], hepatic=HepaticStage.C)) == 1


def test_ckd_predicate(engine, drugs, rule_factory):
    rule = rule_factory("gent_ckd", required_drugs=["gentamicin"], required_ckd_stage=["G3a", "G4"])
    selection = [drugs["gentamicin"]]
    assert evaluate(engine, selection, [rule], renal=RenalStage.G2) == []
    assert len(evaluate(engine, selection, [rule], renal=RenalStage.G3A)) == 1


def test_stage_only_rule_has_empty_provenance(engine, drugs, rule_factory):
    rule = rule_factory(
        "hepatorenal_risk", "info1", alert_category="combined",
        required_child_pugh=["C"], required_ckd_stage=["G4", "G5", "dialysis"],
    )
    alerts = evaluate(engine, [drugs["meropenem"]], [rule], hepatic=HepaticStage.C, renal=RenalStage.G5)
    assert [a.triggered_by for a in alerts] == [[]]


def test_min_grade_a_drugs(engine, drugs, rule_factory):
    rule = rule_factory("multiple_hepatotoxic", min_grade_a_drugs=2)
    assert evaluate(engine, [drugs["isoniazid"], drugs["meropenem"]], [rule]) == []

    alerts = evaluate(engine, [drugs["isoniazid"], drugs["meropenem"], drugs["valproic_acid"]], [rule])
    assert alerts[0].triggered_by == ["isoniazid", "valproic_acid"]


def test_min_grade_n1_drugs(engine, drugs, rule_factory):
    rule = rule_factory("multiple_nephrotoxic", min_grade_n1_drugs=2)
    assert evaluate(engine, [drugs["gentamicin"], drugs["isoniazid"]], [rule]) == []
    alerts = evaluate(engine, [drugs["gentamicin"], drugs["vancomycin"]], [rule])
    assert alerts[0].triggered_by == ["gentamicin", "vancomycin"]


def test_zero_minimum_count_is_ignored(engine, drugs, rule_factory):
    rule = rule_factory("zero_min", min_grade_a_drugs=0)
    alerts = evaluate(engine, [drugs["meropenem"]], [rule])
    assert alerts[0].triggered_by == []


def test_required_class_with_required_drug(engine, drugs, rule_factory):
    rule = rule_factory(
        "cipro_theophylline", "info1",
        required_drugs=["ciprofloxacin"], required_drug_classes=["Theophylline"],
    )
    assert evaluate(engine, [drugs["ciprofloxacin"]], [rule]) == []
    assert evaluate(engine, [drugs["theophylline"]], [rule]) == []

    alerts = evaluate(engine, [drugs["ciprofloxacin"], drugs["theophylline"]], [rule])
    assert alerts[0].triggered_by == ["ciprofloxacin", "theophylline"]


def test_provenance_is_deduplicated(engine, drugs, rule_factory):
    rule = rule_factory(
        "dedupe", required_drugs=["isoniazid"], min_grade_a_drugs=1, required_drug_classes=["isoniazid"],
    )
    alerts = evaluate(engine, [drugs["isoniazid"]], [rule])
    assert alerts[0].triggered_by == ["isoniazid"]


def test_matches_drug_class_fields(drugs):
    theophylline = drugs["theophylline"]
    assert matches_drug_class(theophylline, "bronchodilator")
    assert matches_drug_class(theophylline, "THEOPHYLLINE")
    assert matches_drug_class(theophylline, "테오필린")
    assert not matches_drug_class(theophylline, "carbapenem")


def test_legacy_rule_fields_are_migrated():
    rule = AlertRule.model_validate({
        "id": "cipro_tizanidine",
        "alert_level": "critical",
        "title": "t",
        "message": "m",
        "required_drugs": ["ciprofloxacin"],
        "required_drug_classes": None,
    })
    assert rule.alert_level == AlertLevel.INFO1
    assert rule.requires_all_drugs is True
    assert rule.required_drug_classes == []


def test_detect_alerts_uses_shared_engine(drugs, rule_factory):
    alerts = detect_alerts([drugs["isoniazid"]], "normal", "normal", [rule_factory("global_notice")])
    assert [a.id for a in alerts] == ["global_notice"]
