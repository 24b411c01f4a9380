"""Validates the classifier's parsed JSON and builds verdicts."""

from typing import Any

from ingredex.classification.exceptions import ClassificationValidationError
from ingredex.classification.models import IngredientVerdict, RiskLevel, Verdict


def validate_and_build(data: dict[str, Any]) -> list[IngredientVerdict]:
    """Build IngredientVerdicts in reply order.

    Raises:
        ClassificationValidationError: on any validation failure.
    """
    raw = data.get("ingredients")
    if not isinstance(raw, list):
        raise ClassificationValidationError("'ingredients' must be a list")
    return [_build_verdict(item, index) for index, item in enumerate(raw)]


def _build_verdict(raw: Any, index: int) -> IngredientVerdict:
    if not isinstance(raw, dict):
        raise ClassificationValidationError(f"Ingredient at index {index} must be an object")
    name = raw.get("name")
    if not name or not isinstance(name, str):
        raise ClassificationValidationError(
            f"Ingredient at index {index}: 'name' must be a non-empty string"
        )
    verdict = _build_enum(Verdict, raw.get("verdict", raw.get("status")), "verdict", index)
    risk_level = _build_enum(RiskLevel, raw.get("riskLevel", raw.get("risk")), "riskLevel", index)
    category = raw.get("category") or ""
    rationale = raw.get("rationale", raw.get("reason")) or ""
    if not isinstance(category, str) or not isinstance(rationale, str):
        raise ClassificationValidationError(
            f"Ingredient at index {index}: 'category' and 'rationale' must be strings"
        )
    return IngredientVerdict(
        name=name.strip(),
        verdict=verdict,
        risk_level=risk_level,
        category=category,
        rationale=rationale,
    )


def _build_enum(enum_cls: Any, raw: Any, field_name: str, index: int) -> Any:
    if not isinstance(raw, str):
        raise ClassificationValidationError(
            f"Ingredient at index {index}: '{field_name}' must be a string"
        )
    normalized = raw.strip().upper().replace(" ", "_").replace("-", "_")
    try:
        return enum_cls(normalized)
    except ValueError as exc:
        raise ClassificationValidationError(
            f"Ingredient at index {index}: '{field_name}' must be one of "
            f"{[member.value for member in enum_cls]}, got {raw!r}"
        ) from exc
