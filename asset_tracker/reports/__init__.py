"""Report generators."""

from asset_tracker.reports.position_report import PositionReportGenerator

__all__ = ["PositionReportGenerator"]
