"""Great-circle distance and the level-dependent match radius."""
import math
from typing import Dict, Optional
from wilayah.core.config import MATCH_DISTANCE_KM

# Earth radius in kilometers
EARTH_RADIUS_KM = 6371.0


def calculate_distance_km(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """
    Calculate distance between two points using Haversine formula.
    
    Args:
        lon1: Longitude of first point
        lat1: Latitude of first point
        lon2: Longitude of second point
        lat2: Latitude of second point
        
    Returns:
        Distance in kilometers
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    
    # Haversine formula
    a = math.sin(dlat/2)**2 + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon/2)**2
    c = 2 * math.asin(min(1.0, math.sqrt(a)))
    
    return EARTH_RADIUS_KM * c


def max_distance_for_level(level: int, thresholds: Optional[Dict[int, float]] = None) -> float:
    """Match radius in km for an administrative level (1 province ... 3 district)."""
    thresholds = thresholds or MATCH_DISTANCE_KM
    if level not in thresholds:
        raise ValueError(f"No match distance configured for level {level}")
    return thresholds[level]
