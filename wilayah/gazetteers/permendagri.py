"""Primary source: the ministry regulation's gazetteer exported to CSV."""
import csv
from pathlib import Path
from typing import Iterator, List, Optional
from wilayah.gazetteers.base import GazetteerProvider


class PermendagriProvider(GazetteerProvider):
    """
    Rows of the administrative-division register, as exported by Tabula.
    
    Rows are variable width; their depth in the hierarchy is decided later
    by the tree builder.
    """
    
    stage = "build"
    
    def __init__(self, data_path: Optional[Path] = None, encoding: str = "utf-8"):
        super().__init__(data_path)
        self.encoding = encoding
    
    def iter_records(self) -> Iterator[List[str]]:
        self._check_path()
        try:
            with open(self.data_path, "r", encoding=self.encoding, newline="") as f:
                for row in csv.reader(f):
                    if row:
                        yield row
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise self._fail(e, "iter_records") from e
    
    def get_name(self) -> str:
        return "Permendagri"
