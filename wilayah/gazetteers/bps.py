"""Secondary source: statistics-agency (BPS) place codes and coordinates."""
import pandas as pd
from pathlib import Path
from typing import Dict, Iterator, Optional, Tuple
from wilayah.core.models import StatsRow
from wilayah.gazetteers.base import GazetteerProvider

REQUIRED_COLUMNS = ["serial", "name", "nid", "parent_nid", "latitude", "longitude"]


def is_plausible_serial(serial: int) -> bool:
    """Codes between 100 and 999 are not valid in the BPS encoding."""
    return serial > 0 and (serial < 100 or serial > 999)


def _to_float(value) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if pd.isna(number) else number


def _to_int(value) -> Optional[int]:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


class BPSProvider(GazetteerProvider):
    """BPS place table with named columns."""
    
    stage = "reconcile"
    
    def __init__(self, data_path: Optional[Path] = None, sep: str = ","):
        super().__init__(data_path)
        self.sep = sep
    
    def _load_frame(self) -> pd.DataFrame:
        self._check_path()
        try:
            df = pd.read_csv(
                self.data_path,
                sep=self.sep,
                dtype=str,
                keep_default_na=False,
                encoding="utf-8",
            )
        except (OSError, ValueError, pd.errors.ParserError) as e:
            raise self._fail(e, "_load_frame") from e
        
        missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
        if missing:
            raise self._fail(ValueError(f"missing columns: {', '.join(missing)}"), "_load_frame")
        
        return df
    
    def iter_records(self) -> Iterator[StatsRow]:
        df = self._load_frame()
        
        # nid -> (name, parent nid), for resolving declared parents
        nodes: Dict[str, Tuple[str, str]] = {
            str(row.nid).strip(): (str(row.name).strip(), str(row.parent_nid).strip())
            for row in df.itertuples(index=False)
        }
        
        for row in df.itertuples(index=False):
            serial = _to_int(row.serial)
            if serial is None or not is_plausible_serial(serial):
                continue
            
            yield StatsRow(
                code=str(serial),
                name=str(row.name).strip(),
                parent_name=self._root_name(nodes, str(row.parent_nid).strip()),
                latitude=_to_float(row.latitude),
                longitude=_to_float(row.longitude),
            )
    
    @staticmethod
    def _root_name(nodes: Dict[str, Tuple[str, str]], parent_nid: str) -> Optional[str]:
        """Name of the top ancestor reached by following parent nids."""
        name = None
        seen = set()
        while parent_nid and parent_nid in nodes and parent_nid not in seen:
            seen.add(parent_nid)
            name, parent_nid = nodes[parent_nid]
        return name
    
    def get_name(self) -> str:
        return "BPS"
