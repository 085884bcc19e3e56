"""
Races API Routes

Endpoints for the next-to-go board, manual refresh and category filters.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from next5racing.features.races import (
    Error,
    Loaded,
    RaceBoardService,
    RaceCategory,
    get_race_board,
)
from next5racing.shared.constants import is_known_category

router = APIRouter()


# === Pydantic schemas ===


class RaceSchema(BaseModel):
    race_id: str
    race_name: Optional[str] = None
    race_number: Optional[int] = None
    meeting_name: Optional[str] = None
    category_id: Optional[str] = None
    advertised_start: Optional[int] = None
    countdown: str
    accessibility_label: str


class CategorySchema(BaseModel):
    id: str
    name: str
    is_selected: bool


class RaceBoardSchema(BaseModel):
    state: str  # "loading" / "loaded" / "empty" / "error"
    message: Optional[str] = None  # error text when state == "error"
    races: list[RaceSchema] = []
    categories: list[CategorySchema] = []
    phase: str


class SetCategoriesRequest(BaseModel):
    category_ids: list[str] = []


class RefreshResponse(BaseModel):
    status: str
    phase: str


def _category_schemas(categories: list[RaceCategory]) -> list[CategorySchema]:
    return [
        CategorySchema(id=c.id, name=c.name, is_selected=c.is_selected)
        for c in categories
    ]


def _require_known(category_id: str):
    if not is_known_category(category_id):
        raise HTTPException(status_code=404, detail=f"Unknown category: {category_id}")


# === Endpoints ===


@router.get("/races", response_model=RaceBoardSchema)
async def get_board(board: RaceBoardService = Depends(get_race_board)):
    """Current board: view state, visible races with countdowns, category chips."""
    snapshot = board.snapshot()
    state = snapshot.state
    scheduler = board.scheduler
    now = scheduler.clock.now()

    races = []
    if isinstance(state, Loaded):
        for race in state.races:
            races.append(RaceSchema(
                race_id=race.race_id,
                race_name=race.race_name,
                race_number=race.race_number,
                meeting_name=race.meeting_name,
                category_id=race.category_id,
                advertised_start=race.advertised_start,
                countdown=snapshot.countdowns.get(
                    race.race_id,
                    scheduler.countdown.render(race.advertised_start, now),
                ),
                accessibility_label=scheduler.countdown.accessibility_label(race, now),
            ))

    return RaceBoardSchema(
        state=state.kind.value,
        message=state.message if isinstance(state, Error) else None,
        races=races,
        categories=_category_schemas(snapshot.categories),
        phase=snapshot.phase.value,
    )


@router.post("/races/refresh", response_model=RefreshResponse, status_code=202)
async def refresh_board(board: RaceBoardService = Depends(get_race_board)):
    """Manual pull / retry: start a refresh without waiting for it."""
    task = board.scheduler.request_refresh("manual")
    if task is None:
        raise HTTPException(status_code=503, detail="Race board is not running")
    return RefreshResponse(status="refreshing", phase=board.scheduler.phase.value)


@router.get("/races/categories", response_model=list[CategorySchema])
async def list_categories(board: RaceBoardService = Depends(get_race_board)):
    return _category_schemas(board.scheduler.categories)


@router.post("/races/categories/{category_id}/toggle", response_model=list[CategorySchema])
async def toggle_category(
    category_id: str,
    board: RaceBoardService = Depends(get_race_board),
):
    """Flip one category and refresh."""
    _require_known(category_id)
    board.scheduler.toggle_category(category_id)
    return _category_schemas(board.scheduler.categories)


@router.put("/races/categories", response_model=list[CategorySchema])
async def set_categories(
    request: SetCategoriesRequest,
    board: RaceBoardService = Depends(get_race_board),
):
    """Replace the selected categories and refresh."""
    for category_id in request.category_ids:
        _require_known(category_id)
    board.scheduler.set_filters(request.category_ids)
    return _category_schemas(board.scheduler.categories)


@router.delete("/races/categories", response_model=list[CategorySchema])
async def clear_categories(board: RaceBoardService = Depends(get_race_board)):
    """Clear the filter (show every category) and refresh."""
    board.scheduler.clear_filters()
    return _category_schemas(board.scheduler.categories)
