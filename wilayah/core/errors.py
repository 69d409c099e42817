"""Fatal pipeline errors, tagged with the stage and source that failed."""
from typing import Optional


class PipelineError(Exception):
    """A stage of the pipeline could not complete."""

    def __init__(self, stage: str, message: str, source: Optional[str] = None):
        self.stage = stage
        self.source = source
        where = f"{stage} ({source})" if source else stage
        super().__init__(f"{where}: {message}")


class SourceReadError(PipelineError):
    """An input source could not be opened or parsed."""


class SinkError(PipelineError):
    """The fact sink rejected a fact."""
