"""Project records, their aggregation and the current snapshot."""

from openpronounce.core.projects.aggregation import AggregationPipeline, PipelineError
from openpronounce.core.projects.models import Project, Snapshot, sort_by_name
from openpronounce.core.projects.store import SnapshotStore

__all__ = [
    "AggregationPipeline",
    "PipelineError",
    "Project",
    "Snapshot",
    "SnapshotStore",
    "sort_by_name",
]
