"""Workflow orchestration for one reconciliation pass over a snapshot triple."""

from .service import ReconciliationReport, ReconciliationService

__all__ = ["ReconciliationReport", "ReconciliationService"]
