"""
Shared Data Models for htmlstruct

Contains Pydantic models describing the outcome of an extraction run.
Used by RecordMapper and the CLI to report what was filled.
"""

from typing import Dict, Any, List

from pydantic import BaseModel, Field


class ExtractionReport(BaseModel):
    """Statistics for one build call"""

    record_type: str
    annotation_key: str

    # Tag index information
    fields_indexed: int = 0
    fields_skipped: List[str] = Field(default_factory=list)

    # Per-record outcome, counted over every record built
    records_built: int = 0
    fields_assigned: int = 0
    fields_empty: int = 0

    @property
    def fields_total(self) -> int:
        """Fields that were resolved for each record"""
        return self.fields_indexed - len(self.fields_skipped)

    @property
    def fill_ratio(self) -> float:
        """Share of resolved fields that received a value"""
        attempts = self.fields_total * self.records_built
        if attempts <= 0:
            return 0.0
        return self.fields_assigned / attempts

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/storage"""
        data = self.model_dump()
        data['fill_ratio'] = round(self.fill_ratio, 3)
        return data

    def __repr__(self) -> str:
        return (f"ExtractionReport({self.record_type}, key={self.annotation_key}, "
                f"records={self.records_built}, assigned={self.fields_assigned})")
