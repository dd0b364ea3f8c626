from .errors import CyclicGraphError, DuplicateJobError, InvalidMachineCountError, UnknownJobError
from .graph import Communication, Job, WorkflowGraph
from .schedulers import ListScheduler, Schedule, ScheduledJob, Simulator, schedule
from .version import __version__

__all__ = [
    "Communication",
    "CyclicGraphError",
    "DuplicateJobError",
    "InvalidMachineCountError",
    "Job",
    "ListScheduler",
    "Schedule",
    "ScheduledJob",
    "Simulator",
    "UnknownJobError",
    "WorkflowGraph",
    "schedule",
    "__version__",
]
