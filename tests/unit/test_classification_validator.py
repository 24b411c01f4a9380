import pytest

from ingredex.classification.exceptions import ClassificationValidationError
from ingredex.classification.models import RiskLevel, Verdict
from ingredex.classification.validator import validate_and_build


def _make_entry(**overrides: object) -> dict[str, object]:
    entry: dict[str, object] = {
        "name": "gelatin",
        "verdict": "VERIFY_SOURCE",
        "riskLevel": "HIGH",
        "category": "Animal derived",
        "rationale": "Source animal unknown",
    }
    entry.update(overrides)
    return entry


class TestValidateAndBuild:
    def test_builds_verdicts(self) -> None:
        entries = [_make_entry(), _make_entry(name="water", verdict="APPROVED", riskLevel="VERY_LOW")]
        verdicts = validate_and_build({"ingredients": entries})
        assert verdicts[0].verdict is Verdict.VERIFY_SOURCE
        assert verdicts[0].risk_level is RiskLevel.HIGH
        assert verdicts[0].category == "Animal derived"
        assert verdicts[1].name == "water"
        assert verdicts[0].synthetic is False

    def test_accepts_alternate_field_names_and_spellings(self) -> None:
        entry = {"name": "E471", "status": "verify source", "risk": "very-high", "reason": "mixed origin"}
        verdict = validate_and_build({"ingredients": [entry]})[0]
        assert verdict.verdict is Verdict.VERIFY_SOURCE
        assert verdict.risk_level is RiskLevel.VERY_HIGH
        assert verdict.rationale == "mixed origin"
        assert verdict.category == ""

    def test_requires_ingredients_list(self) -> None:
        with pytest.raises(ClassificationValidationError, match="'ingredients' must be a list"):
            validate_and_build({})

    def test_rejects_unknown_verdict(self) -> None:
        with pytest.raises(ClassificationValidationError, match="'verdict' must be one of"):
            validate_and_build({"ingredients": [_make_entry(verdict="MAYBE")]})

    def test_rejects_missing_name(self) -> None:
        with pytest.raises(ClassificationValidationError, match="'name' must be a non-empty string"):
            validate_and_build({"ingredients": [_make_entry(name="")]})

    def test_rejects_non_object_entry(self) -> None:
        with pytest.raises(ClassificationValidationError, match="index 0 must be an object"):
            validate_and_build({"ingredients": ["gelatin"]})
