"""Pipeline modules for SmartScreen: ranked views and batch scoring."""

from .aggregator import DashboardSummary, PipelineAggregator, PipelineEntry, PipelineSummary
from .runner import BatchResult, run_batch_scoring

__all__ = [
    'PipelineAggregator',
    'PipelineEntry',
    'PipelineSummary',
    'DashboardSummary',
    'BatchResult',
    'run_batch_scoring',
]
