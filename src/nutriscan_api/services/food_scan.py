"""Food scan orchestration.

Runs one scan end to end: identify foods in the image, resolve each item's
nutrition concurrently, and aggregate the totals. ``scan_food`` holds no
state of its own; callers that need an observable lifecycle use
``FoodScanSession``.
"""

import asyncio
import logging
from typing import Callable, Sequence

from nutriscan_api.core.exceptions import EmptyResultError, ExternalServiceError
from nutriscan_api.models.food_scan import (
    GENERIC_SCAN_MESSAGE,
    NO_FOOD_MESSAGE,
    FoodNutrition,
    IdentifiedFoodItem,
    ScanError,
    ScanErrorCode,
    ScanOutcome,
    ScanResult,
    ScanState,
)
from nutriscan_api.services.food_recognition import FoodIdentificationService
from nutriscan_api.services.nutrition_lookup import NutritionLookupService
from nutriscan_api.utils.rounding import round1

logger = logging.getLogger(__name__)

StateHook = Callable[[ScanState], None]


def aggregate_nutrition(items: Sequence[FoodNutrition]) -> ScanResult:
    """Sum per-item nutrition into a ScanResult with one-decimal totals."""
    return ScanResult(
        items=list(items),
        total_calories=round1(sum(item.calories for item in items)),
        total_protein=round1(sum(item.protein for item in items)),
        total_carbs=round1(sum(item.carbs for item in items)),
        total_fat=round1(sum(item.fat for item in items)),
    )


async def lookup_all(
    items: Sequence[IdentifiedFoodItem],
    nutrition: NutritionLookupService,
) -> list[FoodNutrition]:
    """
    Look up every item concurrently.

    All-or-nothing: the first lookup to raise cancels the rest and its
    exception propagates. Results keep the order of ``items``.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            tasks = [
                tg.create_task(nutrition.lookup(item.name, item.estimated_grams))
                for item in items
            ]
    except ExceptionGroup as eg:
        raise eg.exceptions[0]

    return [task.result() for task in tasks]


async def scan_food(
    image_b64: str,
    *,
    recognizer: FoodIdentificationService,
    nutrition: NutritionLookupService,
    on_state: StateHook | None = None,
) -> ScanOutcome:
    """
    Scan a base64 JPEG for food and estimate its nutrition.

    Args:
        image_b64: Base64-encoded JPEG
        recognizer: Food identification client
        nutrition: Nutrition lookup client
        on_state: Called with LOADING, then SUCCESS or ERROR

    Returns:
        ScanOutcome holding either the result or a user-facing error
    """

    def emit(state: ScanState) -> None:
        if on_state is not None:
            on_state(state)

    emit(ScanState.loading())

    try:
        items = await recognizer.identify(image_b64)

        if not items:
            raise EmptyResultError("Identification returned no items")

        logger.info(f"Looking up nutrition for {len(items)} item(s)")
        records = await lookup_all(items, nutrition)
        result = aggregate_nutrition(records)

    except EmptyResultError:
        logger.info("No food items detected in scan")
        error = ScanError(code=ScanErrorCode.NO_FOOD_DETECTED, message=NO_FOOD_MESSAGE)
    except ExternalServiceError as e:
        logger.warning(f"Food scan failed [{e.error_code}] via {e.provider}: {e.message}")
        code = ScanErrorCode.__members__.get(e.error_code, ScanErrorCode.UNKNOWN_ERROR)
        error = ScanError(code=code, message=GENERIC_SCAN_MESSAGE)
    except Exception:
        logger.exception("Unexpected error during food scan")
        error = ScanError(code=ScanErrorCode.UNKNOWN_ERROR, message=GENERIC_SCAN_MESSAGE)
    else:
        logger.info(
            f"Food scan complete: {len(result.items)} item(s), {result.total_calories} kcal"
        )
        emit(ScanState.succeeded(result))
        return ScanOutcome(result=result)

    emit(ScanState.failed(error.message))
    return ScanOutcome(error=error)


class FoodScanSession:
    """
    Caller-owned scan state.

    Exposes ``result``, ``error`` and ``is_loading`` for a UI to observe.
    Only one scan may be in flight; starting another while loading raises
    InvalidScanTransitionError. A ``reset()`` during a scan discards that
    scan's eventual outcome.
    """

    def __init__(
        self,
        recognizer: FoodIdentificationService,
        nutrition: NutritionLookupService,
    ):
        self.recognizer = recognizer
        self.nutrition = nutrition
        self._state = ScanState.idle()
        self._generation = 0

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def result(self) -> ScanResult | None:
        return self._state.result

    @property
    def error(self) -> str | None:
        return self._state.error

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    def _hook(self, generation: int) -> StateHook:
        def apply(new_state: ScanState) -> None:
            if generation != self._generation:
                logger.debug(f"Dropping stale scan state: {new_state.status.value}")
                return
            self._state = self._state.transition(new_state)

        return apply

    async def scan(self, image_b64: str) -> ScanState:
        """Run a scan (or a retry) and return the final state."""
        self._state.transition(ScanState.loading())
        self._generation += 1

        await scan_food(
            image_b64,
            recognizer=self.recognizer,
            nutrition=self.nutrition,
            on_state=self._hook(self._generation),
        )
        return self._state

    def reset(self) -> None:
        """Return to idle from any state."""
        self._generation += 1
        self._state = ScanState.idle()
