"""Workflows: execução durável de steps e registro de execuções."""

from app.workflows.calendar_runs import (
    CalendarRun,
    CalendarRunRegistry,
    RunParams,
    RunState,
    RunStatus,
    run_id_for,
)
from app.workflows.steps import BackoffPolicy, StepOptions, WorkflowStepRunner

__all__ = [
    "BackoffPolicy",
    "CalendarRun",
    "CalendarRunRegistry",
    "RunParams",
    "RunState",
    "RunStatus",
    "StepOptions",
    "WorkflowStepRunner",
    "run_id_for",
]
