"""Count parity between submitted ingredients and returned verdicts.

Missing verdicts are detected by position: the classifier's i-th verdict
answers the i-th submitted ingredient, so any submitted ingredient past
the last returned verdict gets a sentinel entry under its original name.
"""

from dataclasses import replace

from ingredex.classification.models import (
    ClassificationRequest,
    ClassificationResult,
    IngredientVerdict,
    RiskLevel,
    Verdict,
)
from ingredex.logging.logger import Log

SENTINEL_REASON = "Analysis incomplete - requires manual review"
SENTINEL_CATEGORY = "Incomplete Analysis"


def sentinel_verdict(name: str) -> IngredientVerdict:
    return IngredientVerdict(
        name=name,
        verdict=Verdict.VERIFY_SOURCE,
        risk_level=RiskLevel.MEDIUM,
        category=SENTINEL_CATEGORY,
        rationale=SENTINEL_REASON,
        synthetic=True,
    )


def ensure_complete(
    request: ClassificationRequest, result: ClassificationResult
) -> ClassificationResult:
    """Return ``result`` with exactly one verdict per submitted ingredient."""
    expected = len(request.ingredients)
    verdicts = list(result.ingredients)

    if len(verdicts) < expected:
        Log.warning(
            f"Classifier returned {len(verdicts)} of {expected} verdicts for "
            f"'{request.product_name}'; padding {expected - len(verdicts)} for manual review"
        )
        verdicts.extend(sentinel_verdict(name) for name in request.ingredients[len(verdicts):])
    elif len(verdicts) > expected:
        Log.warning(
            f"Classifier returned {len(verdicts)} verdicts for {expected} ingredients of "
            f"'{request.product_name}'; extra entries dropped"
        )
        verdicts = verdicts[:expected]

    return replace(result, ingredients=verdicts, expected_count=expected)
