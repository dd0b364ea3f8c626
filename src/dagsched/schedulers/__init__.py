from .base import Scheduler
from .critical import critical_weight, critical_weights, makespan_lower_bound
from .listscheduler import ListScheduler, schedule
from .schedule import Schedule, ScheduledJob
from .simulate import ExecutionReport, Simulator
from .toposort import priority_topological_sort

__all__ = [
    "ExecutionReport",
    "ListScheduler",
    "Schedule",
    "ScheduledJob",
    "Scheduler",
    "Simulator",
    "critical_weight",
    "critical_weights",
    "makespan_lower_bound",
    "priority_topological_sort",
    "schedule",
]
