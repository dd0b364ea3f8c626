from .export import deserialise, dump, from_json, load, serialise, to_json
from .graph import JobLike, WorkflowGraph, job_name
from .networkx import from_networkx, to_networkx
from .nodes import Communication, Job

__all__ = [
    "Communication",
    "Job",
    "JobLike",
    "WorkflowGraph",
    "job_name",
    "deserialise",
    "dump",
    "from_json",
    "from_networkx",
    "load",
    "serialise",
    "to_json",
    "to_networkx",
]
