"""GeoNames gazetteer provider using local export files."""
import csv
import pandas as pd
from pathlib import Path
from typing import Iterator, Optional
from wilayah.core.config import GEONAMES_CHUNK_SIZE
from wilayah.core.models import GeonameRecord
from wilayah.gazetteers.base import GazetteerProvider

# GeoNames TSV format
GEONAMES_COLUMNS = [
    "geonameid", "name", "asciiname", "alternatenames", "latitude", "longitude",
    "feature_class", "feature_code", "country_code", "cc2", "admin1", "admin2",
    "admin3", "admin4", "population", "elevation", "dem", "timezone", "modification_date"
]


class GeoNamesProvider(GazetteerProvider):
    """GeoNames provider streaming a TSV dump (allCountries.txt or ID.txt) in chunks."""
    
    stage = "match"
    
    def __init__(
        self,
        data_path: Optional[Path] = None,
        country_code: Optional[str] = None,
        chunk_size: int = GEONAMES_CHUNK_SIZE
    ):
        """
        Initialize GeoNames provider.
        
        Args:
            data_path: Path to GeoNames TSV file
            country_code: Keep only records of this country (all when None)
            chunk_size: Rows read per chunk
        """
        super().__init__(data_path)
        self.country_code = country_code
        self.chunk_size = chunk_size
    
    def iter_records(self) -> Iterator[GeonameRecord]:
        self._check_path()
        try:
            chunks = pd.read_csv(
                self.data_path,
                sep="\t",
                header=None,
                names=GEONAMES_COLUMNS,
                dtype=str,
                keep_default_na=False,
                quoting=csv.QUOTE_NONE,
                encoding="utf-8",
                chunksize=self.chunk_size,
            )
            for df in chunks:
                if self.country_code:
                    df = df[df["country_code"] == self.country_code]
                for row in df.itertuples(index=False):
                    record = self._to_record(row)
                    if record is not None:
                        yield record
        except (OSError, ValueError, pd.errors.ParserError) as e:
            raise self._fail(e, "iter_records") from e
    
    @staticmethod
    def _to_record(row) -> Optional[GeonameRecord]:
        try:
            latitude = float(row.latitude)
            longitude = float(row.longitude)
        except ValueError:
            return None
        
        alternates = tuple(
            name.strip() for name in str(row.alternatenames).split(",") if name.strip()
        )
        return GeonameRecord(
            geoname_id=str(row.geonameid).strip(),
            ascii_name=str(row.asciiname).strip(),
            alternate_names=alternates,
            latitude=latitude,
            longitude=longitude,
            feature_class=str(row.feature_class).strip(),
        )
    
    def get_name(self) -> str:
        """Get provider name."""
        return "GeoNames"
