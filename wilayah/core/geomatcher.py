"""Link places to GeoNames records by exact name and distance."""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional
from wilayah.core.models import GeonameRecord, Place
from wilayah.core.place_index import PlaceTree
from wilayah.core.proximity import calculate_distance_km, max_distance_for_level
from wilayah.utils.logging import log_structured


@dataclass
class MatchStats:
    """Counters reported by a matching run."""
    records: int = 0
    candidates: int = 0
    accepted: int = 0
    rejected: int = 0


def candidate_places(tree: PlaceTree, record: GeonameRecord) -> List[Place]:
    """
    Places sharing any name of the record that can still be tested against it.

    A place qualifies when it has coordinates and has not been considered for
    this record already, even under another of the record's names.
    """
    candidates: List[Place] = []
    for name in record.names():
        for place in tree.by_name(name):
            if not place.has_coordinates:
                continue
            if record.geoname_id in place.candidate_geonames:
                continue
            place.candidate_geonames.add(record.geoname_id)
            candidates.append(place)
    return candidates


def match_record(
    tree: PlaceTree,
    record: GeonameRecord,
    thresholds: Optional[Dict[int, float]] = None
) -> List[Place]:
    """
    Test one GeoNames record against its name candidates.
    
    Args:
        tree: Place tree with coordinates from the BPS reconciliation
        record: GeoNames record
        thresholds: Match radius per level (configured defaults when None)
        
    Returns:
        Places the record was accepted for
    """
    accepted = []
    for place in candidate_places(tree, record):
        distance_km = calculate_distance_km(
            place.longitude, place.latitude, record.longitude, record.latitude
        )
        if distance_km <= max_distance_for_level(place.level, thresholds):
            place.equivalent_geonames.append(record.geoname_id)
            accepted.append(place)
        else:
            log_structured("debug", "GeoNames candidate too far",
                           geoname_id=record.geoname_id, place=place.path,
                           distance_km=round(distance_km, 2))
    return accepted


def match_geonames(
    tree: PlaceTree,
    records: Iterable[GeonameRecord],
    thresholds: Optional[Dict[int, float]] = None
) -> MatchStats:
    """
    Stream GeoNames records through the matcher.
    
    Args:
        tree: Place tree, final after reconciliation
        records: GeoNames records
        thresholds: Match radius per level
        
    Returns:
        Counters of the run
    """
    stats = MatchStats()
    for record in records:
        stats.records += 1
        accepted = match_record(tree, record, thresholds)
        stats.accepted += len(accepted)
    
    stats.candidates = sum(len(place.candidate_geonames) for place in tree)
    stats.rejected = stats.candidates - sum(len(place.equivalent_geonames) for place in tree)
    log_structured("info", "GeoNames matching finished", **vars(stats))
    return stats
