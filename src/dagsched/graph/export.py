from pathlib import Path

from pydantic import BaseModel, Field

from .graph import WorkflowGraph


class JobDefinition(BaseModel):
    name: str
    execution_time: int = Field(ge=0, description="duration of the job on any machine")


class CommunicationDefinition(BaseModel):
    source: str
    target: str
    comm_time: int = Field(
        0, ge=0, description="transfer cost, paid only when source and target run on different machines"
    )


class WorkflowDefinition(BaseModel):
    # NOTE job order is significant, it is the tie-break order of the scheduler
    jobs: list[JobDefinition] = Field(default_factory=list)
    communications: list[CommunicationDefinition] = Field(default_factory=list)


def _definition(graph: WorkflowGraph) -> WorkflowDefinition:
    return WorkflowDefinition(
        jobs=[JobDefinition(**job.serialise()) for job in graph.jobs()],
        communications=[CommunicationDefinition(**comm.serialise()) for comm in graph.edges()],
    )


def _build(definition: WorkflowDefinition) -> WorkflowGraph:
    graph = WorkflowGraph()
    for job in definition.jobs:
        graph.add_job(job.name, job.execution_time)
    for comm in definition.communications:
        graph.add_communication(comm.source, comm.target, comm.comm_time)
    return graph


def serialise(graph: WorkflowGraph) -> dict:
    """Convert a graph to a serialisable representation"""
    return _definition(graph).model_dump()


def to_json(graph: WorkflowGraph) -> str:
    """Serialise a graph as JSON

    See also `serialise`"""
    return _definition(graph).model_dump_json()


def deserialise(data: dict) -> WorkflowGraph:
    """Build a graph from a serialisable representation

    Malformed documents raise `pydantic.ValidationError`; references to
    undeclared jobs raise `UnknownJobError` and duplicate names raise
    `DuplicateJobError`.
    """
    return _build(WorkflowDefinition.model_validate(data))


def from_json(data: str | bytes) -> WorkflowGraph:
    """Build a graph from JSON

    See also `deserialise`"""
    return _build(WorkflowDefinition.model_validate_json(data))


def load(path: str | Path) -> WorkflowGraph:
    return from_json(Path(path).read_text())


def dump(graph: WorkflowGraph, path: str | Path) -> None:
    Path(path).write_text(to_json(graph))
