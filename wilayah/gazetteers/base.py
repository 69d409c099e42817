"""Base class for gazetteer providers."""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator, Any, Optional
from wilayah.core.errors import SourceReadError
from wilayah.utils.logging import log_error


class GazetteerProvider(ABC):
    """Base class for the local gazetteer files read by the pipeline."""
    
    stage = "read"
    
    def __init__(self, data_path: Optional[Path] = None):
        """
        Initialize provider.
        
        Args:
            data_path: Path to the source file
        """
        self.data_path = Path(data_path) if data_path is not None else None
    
    @abstractmethod
    def iter_records(self) -> Iterator[Any]:
        """
        Lazily yield the records of the source.
        
        Raises:
            SourceReadError: The file is missing or cannot be parsed
        """
        pass
    
    @abstractmethod
    def get_name(self) -> str:
        """Get provider name."""
        pass
    
    def _check_path(self):
        if self.data_path is None or not self.data_path.exists():
            raise SourceReadError(self.stage, f"file not found: {self.data_path}", source=self.get_name())
    
    def _fail(self, error: Exception, function: str) -> SourceReadError:
        """Log a read failure and wrap it for the caller to raise."""
        log_error(error, {
            "module": type(self).__module__,
            "function": function,
            "source": self.get_name(),
            "data_path": str(self.data_path) if self.data_path else None,
        })
        return SourceReadError(self.stage, str(error), source=self.get_name())
