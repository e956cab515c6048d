"""Response coverage per district and taluka.

Coverage compares the number of registered schools in an area with the number
of responses submitted from it.
"""
from typing import List, Sequence

import pandas as pd

from app.domain.forms import FormDefinition, ResponseRecord
from app.domain.schools import DashboardStats, DistrictCoverage, School, TalukaCoverage

_LOCATION_COLS = ["district_name", "taluka_name"]


def _completion_rate(responses: int, schools: int) -> int:
    """Percentage of schools responded, rounded half up."""
    if schools <= 0:
        return 0
    return int(responses * 100 / schools + 0.5)


def _schools_df(schools: Sequence[School]) -> pd.DataFrame:
    return pd.DataFrame([s.model_dump() for s in schools], columns=["udise_code", "school_name", *_LOCATION_COLS])


def _responses_df(responses: Sequence[ResponseRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        [{col: getattr(r, col) for col in _LOCATION_COLS} for r in responses],
        columns=_LOCATION_COLS,
    )


def district_coverage(schools: Sequence[School], responses: Sequence[ResponseRecord]) -> List[DistrictCoverage]:
    """One row per district with registered schools, sorted by district name."""
    sdf = _schools_df(schools)
    if sdf.empty:
        return []
    school_counts = sdf.groupby("district_name").size()
    response_counts = _responses_df(responses).groupby("district_name").size()

    rows = []
    for district, school_count in school_counts.items():
        response_count = int(response_counts.get(district, 0))
        rows.append(DistrictCoverage(
            name=district,
            school_count=int(school_count),
            response_count=response_count,
            completion_rate=_completion_rate(response_count, int(school_count)),
        ))
    return rows


def taluka_coverage(schools: Sequence[School], responses: Sequence[ResponseRecord]) -> List[TalukaCoverage]:
    """One row per (district, taluka) pair with registered schools."""
    sdf = _schools_df(schools)
    if sdf.empty:
        return []
    school_counts = sdf.groupby(_LOCATION_COLS).size()
    response_counts = _responses_df(responses).groupby(_LOCATION_COLS).size()

    rows = []
    for (district, taluka), school_count in school_counts.items():
        response_count = int(response_counts.get((district, taluka), 0))
        rows.append(TalukaCoverage(
            name=taluka,
            district=district,
            school_count=int(school_count),
            response_count=response_count,
            completion_rate=_completion_rate(response_count, int(school_count)),
        ))
    return rows


def dashboard_stats(
    schools: Sequence[School],
    forms: Sequence[FormDefinition],
    responses: Sequence[ResponseRecord],
) -> DashboardStats:
    return DashboardStats(
        total_schools=len(schools),
        total_forms=len(forms),
        total_responses=len(responses),
    )
