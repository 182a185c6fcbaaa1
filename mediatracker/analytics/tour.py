"""Listening-tour progress and map placement.

Districts are placed on a 600x300 SVG view box with a 10px margin using a
plain linear (equirectangular) projection of the state's bounding box.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Bounds:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float


# North Dakota
ND_BOUNDS = Bounds(min_lat=45.9, max_lat=49.0, min_lng=-104.1, max_lng=-96.5)

MAP_WIDTH = 580.0
MAP_HEIGHT = 280.0
MAP_MARGIN = 10.0

RECENT_VISITS = 4


def project_to_svg(lat: float, lng: float, bounds: Bounds = ND_BOUNDS) -> Tuple[float, float]:
    x = (lng - bounds.min_lng) / (bounds.max_lng - bounds.min_lng) * MAP_WIDTH + MAP_MARGIN
    # SVG y grows downward, latitude grows northward.
    y = (bounds.max_lat - lat) / (bounds.max_lat - bounds.min_lat) * MAP_HEIGHT + MAP_MARGIN
    return x, y


@dataclass(frozen=True)
class TourProgress:
    visited: int
    total: int
    percent: float
    last_visit: Optional[Dict[str, Any]]
    recent_visits: List[Dict[str, Any]]
    upcoming: List[Dict[str, Any]]


@dataclass(frozen=True)
class DistrictMarker:
    name: str
    x: float
    y: float
    status: str  # visited | upcoming | unscheduled
    is_last: bool


def tour_progress(tour: Dict[str, Any]) -> TourProgress:
    visits = list(tour.get("visits") or [])
    total = int(tour.get("totalDistricts") or 0)
    percent = (len(visits) / total * 100.0) if total > 0 else 0.0
    return TourProgress(
        visited=len(visits),
        total=total,
        percent=round(percent, 1),
        last_visit=visits[-1] if visits else None,
        recent_visits=list(reversed(visits[-RECENT_VISITS:])),
        upcoming=list(tour.get("upcoming") or []),
    )


def district_markers(tour: Dict[str, Any], bounds: Bounds = ND_BOUNDS) -> List[DistrictMarker]:
    visits = tour.get("visits") or []
    visited = {v.get("district") for v in visits}
    upcoming = {u.get("district") for u in tour.get("upcoming") or []}
    last = visits[-1].get("district") if visits else None

    out: List[DistrictMarker] = []
    for d in tour.get("allDistricts") or []:
        name = d.get("name")
        x, y = project_to_svg(float(d["lat"]), float(d["lng"]), bounds)
        if name in visited:
            status = "visited"
        elif name in upcoming:
            status = "upcoming"
        else:
            status = "unscheduled"
        out.append(DistrictMarker(name=name, x=round(x, 2), y=round(y, 2), status=status, is_last=(name == last)))
    return out
