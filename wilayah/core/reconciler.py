"""Merge the statistics-agency code/coordinate table into the place tree."""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple
from wilayah.core.config import DISTRICT_LEVEL, PROVINCE_LEVEL, REGENCY_LEVEL
from wilayah.core.models import Place, StatsRow
from wilayah.core.normalization import name_key, normalize_name
from wilayah.core.place_index import PlaceTree
from wilayah.utils.logging import log_structured


@dataclass
class ReconcileStats:
    """Counters reported by a reconciliation run."""
    rows: int = 0
    unmatched: int = 0
    confirmed: int = 0
    moved: int = 0
    ambiguous: int = 0
    coordinates_recorded: int = 0
    coordinates_propagated: int = 0


def level_for_code(code: str) -> int:
    """Administrative level implied by the number of digits of a BPS code."""
    if len(code) <= 2:
        return PROVINCE_LEVEL
    if len(code) <= 4:
        return REGENCY_LEVEL
    return DISTRICT_LEVEL


def _name_variants(name: str) -> List[str]:
    variants = []
    for variant in (name, normalize_name(name, True)):
        key = name_key(variant)
        if key and key not in variants:
            variants.append(key)
    return variants


def in_declared_province(tree: PlaceTree, place: Place, parent_name: str) -> bool:
    """Whether the place's province carries the row's declared root parent name."""
    province = tree.province_of(place)
    labels = {name_key(label) for label in province.labels() + [province.full_name]}
    return any(variant in labels for variant in _name_variants(parent_name))


def find_candidates(tree: PlaceTree, row: StatsRow) -> List[Place]:
    """Places sharing the row's name, level and declared province."""
    # Level by digit count: a regency labelled by its nominal name ("Fakfak")
    # must not take the code of the district of the same name beneath it
    level = level_for_code(row.code)
    candidates: List[Place] = []
    seen = set()
    for variant in _name_variants(row.name):
        for place in tree.by_name(variant):
            if place.place_id in seen or place.level != level:
                continue
            if row.parent_name and not in_declared_province(tree, place, row.parent_name):
                continue
            seen.add(place.place_id)
            candidates.append(place)
    return candidates


def propagate_coordinates(tree: PlaceTree, coordinates: Dict[str, Tuple[float, float]]) -> int:
    """
    Copy recorded coordinates onto the places currently holding each code.

    Args:
        tree: Place tree whose code index is final
        coordinates: BPS code -> (latitude, longitude)

    Returns:
        Number of places that received coordinates
    """
    propagated = 0
    for code, (latitude, longitude) in coordinates.items():
        place = tree.by_code(code)
        if place is None:
            continue
        place.latitude = latitude
        place.longitude = longitude
        propagated += 1
    return propagated


def reconcile(tree: PlaceTree, rows: Iterable[StatsRow]) -> ReconcileStats:
    """
    Correct statistics codes from the BPS table, then attach its coordinates.

    Coordinates are recorded per code while the rows stream by and only
    propagated once every code move is done, so the row order of the BPS
    table does not have to follow the tree.

    Args:
        tree: Place tree built from the primary source
        rows: Plausible BPS rows

    Returns:
        Counters of the run
    """
    stats = ReconcileStats()
    coordinates: Dict[str, Tuple[float, float]] = {}

    for row in rows:
        stats.rows += 1
        if row.latitude is not None and row.longitude is not None:
            coordinates[row.code] = (row.latitude, row.longitude)

        candidates = find_candidates(tree, row)
        if not candidates:
            stats.unmatched += 1
            continue
        if any(place.stats_code == row.code for place in candidates):
            stats.confirmed += 1
            continue

        if len(candidates) > 1:
            stats.ambiguous += 1
            log_structured("warning", "Ambiguous BPS row, code moved through every candidate",
                           code=row.code, name=row.name,
                           candidates=[place.path for place in candidates])

        for place in candidates:
            old_code: Optional[str] = place.stats_code
            evicted = tree.move_code(row.code, place)
            stats.moved += 1
            log_structured("info", "Statistics code corrected",
                           place=place.path, old_code=old_code, new_code=row.code,
                           evicted=evicted.path if evicted else None)

    stats.coordinates_recorded = len(coordinates)
    stats.coordinates_propagated = propagate_coordinates(tree, coordinates)

    log_structured("info", "BPS reconciliation finished", **vars(stats))
    return stats
