"""FastAPI application factory."""

import logging
from datetime import date
from uuid import UUID

from fastapi import FastAPI, HTTPException, Query, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from calorie_tracker.api.admin import router as admin_router
from calorie_tracker.api.schemas import (
    BackfillRequest,
    MealCreate,
    MealEstimate,
    MealOut,
    MealUpdate,
    ProfileOut,
    ProfileUpdate,
    StreakOut,
    StreakUpdateOut,
    SummaryOut,
)
from calorie_tracker.app_logging import configure_logging
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.errors import MealNotFoundError, StoreError
from calorie_tracker.domain.meals import HistoryRange

MAX_HISTORY_DAYS = 366
HTTP_422_UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error(
            "Store operation failed",
            exc_info=exc,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/meals", status_code=status.HTTP_201_CREATED)
    async def create_meal(payload: MealCreate, request: Request) -> MealOut:
        """Log a manually entered meal."""
        state_container: AppContainer = request.app.state.container
        meal = state_container.meal_service.log_meal(payload.to_draft())
        return MealOut.from_meal(meal)

    @app.post("/meals/estimate", status_code=status.HTTP_201_CREATED)
    async def create_meal_from_estimate(
        payload: MealEstimate, request: Request
    ) -> MealOut:
        """Log a meal from a photo estimation response."""
        state_container: AppContainer = request.app.state.container
        meal = state_container.meal_service.log_meal(payload.to_draft())
        return MealOut.from_meal(meal)

    @app.get("/meals")
    async def list_meals(
        request: Request, day: date | None = None
    ) -> dict[str, object]:
        """Return meals logged on a day, today by default."""
        state_container: AppContainer = request.app.state.container
        target = day or state_container.summary_service.today()
        meals = state_container.meal_service.meals_for_day(target)
        return {
            "day": target.isoformat(),
            "meals": [_dump(MealOut.from_meal(meal)) for meal in meals],
        }

    @app.get("/meals/history")
    async def meal_history(
        request: Request,
        period: HistoryRange = Query(default=HistoryRange.ALL_TIME, alias="range"),
        q: str | None = None,
    ) -> dict[str, object]:
        """Return meals in a history window, newest first, filtered by text."""
        state_container: AppContainer = request.app.state.container
        meals = state_container.meal_service.history(period, q)
        return {
            "range": period.value,
            "meals": [_dump(MealOut.from_meal(meal)) for meal in meals],
        }

    @app.patch("/meals/{meal_id}")
    async def update_meal(
        meal_id: UUID, payload: MealUpdate, request: Request
    ) -> MealOut:
        """Edit a meal and refresh the summaries it affects."""
        state_container: AppContainer = request.app.state.container
        try:
            meal = state_container.meal_service.update_meal(
                meal_id, payload.to_changes()
            )
        except MealNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Meal not found"
            ) from exc
        return MealOut.from_meal(meal)

    @app.delete("/meals/{meal_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_meal(meal_id: UUID, request: Request) -> Response:
        """Delete a meal and refresh its day summary."""
        state_container: AppContainer = request.app.state.container
        try:
            state_container.meal_service.delete_meal(meal_id)
        except MealNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Meal not found"
            ) from exc
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @app.get("/summaries")
    async def recent_summaries(request: Request, days: int = 30) -> dict[str, object]:
        """Return recent stored summaries, newest first."""
        if days < 1 or days > MAX_HISTORY_DAYS:
            raise HTTPException(
                status_code=HTTP_422_UNPROCESSABLE,
                detail=f"days must be between 1 and {MAX_HISTORY_DAYS}",
            )
        state_container: AppContainer = request.app.state.container
        service = state_container.summary_service
        summaries = service.recent_summaries(service.today(), days=days)
        items = [_dump(SummaryOut.from_summary(item)) for item in summaries]
        return {"summaries": items}

    @app.get("/summaries/{day}")
    async def daily_summary(day: date, request: Request) -> SummaryOut:
        """Recompute and return the summary for a day."""
        state_container: AppContainer = request.app.state.container
        summary = state_container.summary_service.compute_daily_summary(day)
        return SummaryOut.from_summary(summary)

    @app.post("/summaries/backfill")
    async def backfill_summaries(
        payload: BackfillRequest, request: Request
    ) -> dict[str, object]:
        """Recompute summaries for an inclusive day range."""
        if payload.end < payload.start:
            raise HTTPException(
                status_code=HTTP_422_UNPROCESSABLE,
                detail="end must not be before start",
            )
        if (payload.end - payload.start).days >= MAX_HISTORY_DAYS:
            raise HTTPException(
                status_code=HTTP_422_UNPROCESSABLE,
                detail=f"range must be shorter than {MAX_HISTORY_DAYS} days",
            )
        state_container: AppContainer = request.app.state.container
        summaries = state_container.summary_service.backfill(
            payload.start, payload.end
        )
        logger.info(
            "Backfilled daily summaries: start=%s end=%s",
            payload.start,
            payload.end,
        )
        items = [_dump(SummaryOut.from_summary(item)) for item in summaries]
        return {"summaries": items}

    @app.get("/streaks")
    async def list_streaks(request: Request) -> dict[str, object]:
        """Return the logging and goal streaks."""
        state_container: AppContainer = request.app.state.container
        streaks = state_container.streak_service.get_streaks()
        items = [_dump(StreakOut.from_streak(item)) for item in streaks.values()]
        return {"streaks": items}

    @app.post("/streaks/update")
    async def update_streaks(request: Request) -> StreakUpdateOut:
        """Evaluate today for both streaks."""
        state_container: AppContainer = request.app.state.container
        update = state_container.streak_service.update_streaks()
        return StreakUpdateOut.from_update(update)

    @app.get("/profile")
    async def get_profile(request: Request) -> dict[str, object]:
        """Return the user profile, if one exists."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.current_profile()
        if profile is None:
            return {"profile": None}
        return {"profile": _dump(ProfileOut.from_profile(profile))}

    @app.put("/profile")
    async def update_profile(payload: ProfileUpdate, request: Request) -> ProfileOut:
        """Store new goal inputs on the user profile."""
        state_container: AppContainer = request.app.state.container
        profile = state_container.profile_service.update_goals(
            weight_kg=payload.weight_kg, calorie_goal=payload.calorie_goal
        )
        return ProfileOut.from_profile(profile)

    return app


def _dump(model: BaseModel) -> dict[str, object]:
    return model.model_dump(mode="json")
