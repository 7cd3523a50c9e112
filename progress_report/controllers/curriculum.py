"""Curriculum knowledge base endpoints."""

from typing import Union

from fastapi import APIRouter, HTTPException, Query, status

from progress_report.config.dependencies import CurriculumStoreDep
from progress_report.curriculum import (
    CurriculumContext,
    CurriculumStore,
    format_compact,
    format_for_improvement_suggestions,
    normalize_level,
    resolve_context,
)
from progress_report.views.common import ErrorResponse
from progress_report.views.curriculum import (
    CurriculumContextResponse,
    FormattedContextResponse,
    LevelsResponse,
    LevelSummary,
    UnitsResponse,
)

router = APIRouter(prefix="/curriculum", tags=["curriculum"])

CONTEXT_NOT_FOUND = "Curriculum context not found"

_LEVEL_QUERY = Query(..., min_length=1, description="Level label, e.g. 'Level 3' or 'L3'")
_UNIT_QUERY = Query(..., min_length=1, description="Unit number or 'Unit 5'")


def _resolve_or_404(
    store: CurriculumStore,
    level: str,
    unit: Union[int, str],
) -> CurriculumContext:
    context = resolve_context(store, level, unit)
    if context is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=CONTEXT_NOT_FOUND,
        )
    return context


@router.get("/levels", response_model=LevelsResponse)
async def list_levels(store: CurriculumStoreDep) -> LevelsResponse:
    """List every loaded level with its unit numbers."""

    return LevelsResponse(
        levels=[
            LevelSummary(level=level, units=store.units_for_level(level))
            for level in store.loaded_levels()
        ],
        warnings=store.warnings,
    )


@router.get(
    "/levels/{level}/units",
    response_model=UnitsResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_units(level: str, store: CurriculumStoreDep) -> UnitsResponse:
    """Return the sorted unit numbers of a level."""

    units = store.units_for_level(level)
    if not units:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No curriculum units for {level}",
        )
    return UnitsResponse(level=normalize_level(level), units=units)


@router.get(
    "/context",
    response_model=CurriculumContextResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_context(
    store: CurriculumStoreDep,
    level: str = _LEVEL_QUERY,
    unit: str = _UNIT_QUERY,
) -> CurriculumContextResponse:
    """Resolve the teaching content of one unit.

    Unknown levels, unparseable units and missing units all answer 404 with
    the same detail.
    """

    context = _resolve_or_404(store, level, unit)
    payload = context.to_dict()
    payload["lessonInfo"] = payload.pop("lesson_info")
    return CurriculumContextResponse(**payload)


@router.get(
    "/context/formatted",
    response_model=FormattedContextResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_formatted_context(
    store: CurriculumStoreDep,
    level: str = _LEVEL_QUERY,
    unit: str = _UNIT_QUERY,
) -> FormattedContextResponse:
    """Render the unit as the text blocks injected into report prompts."""

    context = _resolve_or_404(store, level, unit)
    return FormattedContextResponse(
        level=context.level,
        unit=context.unit,
        compact=format_compact(context),
        detailed=format_for_improvement_suggestions(context),
    )
