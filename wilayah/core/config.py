"""Configuration management for the place linkage pipeline."""
import os
from pathlib import Path
from typing import Dict, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Base paths
PROJECT_ROOT = Path(__file__).parent.parent.parent
DATA_DIR = Path(os.getenv("DATA_DIR", PROJECT_ROOT / "datasources"))
PRIMARY_CSV = Path(os.getenv(
    "PRIMARY_CSV", DATA_DIR / "permendagri-18-2013" / "buku-induk.tabula-processed.csv"
))
STATS_CSV = Path(os.getenv("STATS_CSV", DATA_DIR / "bps" / "wilayah.csv"))
GEONAMES_TXT = Path(os.getenv("GEONAMES_TXT", DATA_DIR / "geonames" / "ID.txt"))
OUTPUT_TURTLE = Path(os.getenv("OUTPUT_TURTLE", PROJECT_ROOT / "instances.ttl"))

# Namespaces
PLACE_NS: str = os.getenv("PLACE_NS", "http://benangmerah.net/place/")
ONTOLOGY_NS: str = os.getenv("ONTOLOGY_NS", "http://benangmerah.net/ontology/")
STATS_CODE_NS: str = os.getenv("STATS_CODE_NS", "urn:kode-bps:")
GEONAMES_NS: str = os.getenv("GEONAMES_NS", "http://sws.geonames.org/")

# Administrative levels
PROVINCE_LEVEL = 1
REGENCY_LEVEL = 2
DISTRICT_LEVEL = 3

# Geographic matching settings (km), coarser levels tolerate looser centroids
MATCH_DISTANCE_KM: Dict[int, float] = {
    PROVINCE_LEVEL: float(os.getenv("MATCH_DISTANCE_KM_PROVINCE", "1000")),
    REGENCY_LEVEL: float(os.getenv("MATCH_DISTANCE_KM_REGENCY", "250")),
    DISTRICT_LEVEL: float(os.getenv("MATCH_DISTANCE_KM_DISTRICT", "25")),
}

# Reading settings
GEONAMES_CHUNK_SIZE: int = int(os.getenv("GEONAMES_CHUNK_SIZE", "50000"))
GEONAMES_COUNTRY: Optional[str] = os.getenv("GEONAMES_COUNTRY", "ID") or None
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Government code length of a regency row ("33.01")
REGENCY_CODE_LENGTH = 5
DISTRICT_CODE_LENGTH = 8

# Provinces missing from the primary source, carved out of a listed one.
# Member regencies are matched on their normalized name.
SPLIT_PROVINCES: Dict[str, Dict[str, object]] = {
    "Kalimantan Utara": {
        "parent": "Kalimantan Timur",
        "members": [
            "Kota Tarakan",
            "Kabupaten Bulungan",
            "Kabupaten Malinau",
            "Kabupaten Nunukan",
            "Kabupaten Tana Tidung",
        ],
    },
}


def split_province_for(province_name: str, regency_name: str) -> Optional[str]:
    """Return the split province a regency really belongs to, if any."""
    for split_name, split in SPLIT_PROVINCES.items():
        if split["parent"] == province_name and regency_name in split["members"]:
            return split_name
    return None
