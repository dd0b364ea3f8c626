import logging
from typing import Iterator

from dagsched.errors import CyclicGraphError, DuplicateJobError, UnknownJobError

from .nodes import Communication, Job

logger = logging.getLogger(__name__)

JobLike = str | Job


def job_name(job: JobLike) -> str:
    return job.name if isinstance(job, Job) else job


def _check_duration(value: int, what: str) -> int:
    # bool is an int subclass, but True is not a duration
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{what} must be non-negative, got {value}")
    return value


class WorkflowGraph:
    """Workflow graph

    Jobs are stored by name, in insertion order, and every other structure
    refers to them by name. Each communication is indexed both in the outgoing
    list of its source and in the incoming list of its target, so neighbour
    queries never rescan the graph.

    The graph is built once and then only read: there are no removal
    operations. Acyclicity is assumed, and can be checked with `validate`.
    """

    def __init__(self):
        self._jobs: dict[str, Job] = {}
        self._out_edges: dict[str, list[Communication]] = {}
        self._in_edges: dict[str, list[Communication]] = {}

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, job: object) -> bool:
        if isinstance(job, Job):
            return self._jobs.get(job.name) == job
        return job in self._jobs

    def __iter__(self) -> Iterator[str]:
        return iter(self._jobs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorkflowGraph):
            return NotImplemented
        return list(self.jobs()) == list(other.jobs()) and list(self.edges()) == list(other.edges())

    def __repr__(self) -> str:
        return f"<WorkflowGraph jobs={len(self)} communications={sum(len(e) for e in self._out_edges.values())}>"

    def add_job(self, name: str, execution_time: int) -> Job:
        """Add a job to the graph

        Raises `DuplicateJobError` if a job with the same name exists, in which
        case the graph is left unchanged.
        """
        if name in self._jobs:
            raise DuplicateJobError(name)
        job = Job(name, _check_duration(execution_time, f"Execution time of {name!r}"))
        self._jobs[name] = job
        self._out_edges[name] = []
        self._in_edges[name] = []
        return job

    def add_communication(self, source: JobLike, target: JobLike, comm_time: int) -> Communication:
        """Add a directed communication between two existing jobs

        Raises `UnknownJobError` if either endpoint is missing, in which case
        the graph is left unchanged. Parallel edges are kept, each one being an
        independent transfer.
        """
        source, target = job_name(source), job_name(target)
        for endpoint in (source, target):
            if endpoint not in self._jobs:
                raise UnknownJobError(endpoint)
        comm = Communication(source, target, _check_duration(comm_time, f"Communication time of {source}->{target}"))
        self._out_edges[source].append(comm)
        self._in_edges[target].append(comm)
        return comm

    def get_job(self, job: JobLike) -> Job:
        name = job_name(job)
        try:
            return self._jobs[name]
        except KeyError:
            raise UnknownJobError(name) from None

    def execution_time(self, job: JobLike) -> int:
        return self.get_job(job).execution_time

    def jobs(self) -> Iterator[Job]:
        """Iterate over jobs in insertion order"""
        return iter(self._jobs.values())

    def edges(self) -> Iterator[Communication]:
        """Iterate over communications, grouped by source in job insertion order"""
        for name in self._jobs:
            yield from self._out_edges[name]

    def sources(self) -> Iterator[Job]:
        """Iterate over jobs without incoming communications"""
        for name, job in self._jobs.items():
            if not self._in_edges[name]:
                yield job

    def sinks(self) -> Iterator[Job]:
        """Iterate over terminal jobs, ie jobs without outgoing communications"""
        for name, job in self._jobs.items():
            if not self._out_edges[name]:
                yield job

    def _index(self, index: dict[str, list[Communication]], job: JobLike) -> list[Communication]:
        name = job_name(job)
        try:
            return index[name]
        except KeyError:
            raise UnknownJobError(name) from None

    def get_in_edges(self, job: JobLike) -> list[Communication]:
        return list(self._index(self._in_edges, job))

    def get_out_edges(self, job: JobLike) -> list[Communication]:
        return list(self._index(self._out_edges, job))

    def get_predecessors(self, job: JobLike) -> list[str]:
        """Names of the jobs feeding into `job`, one entry per communication"""
        return [comm.source for comm in self._index(self._in_edges, job)]

    def get_successors(self, job: JobLike) -> list[str]:
        """Names of the jobs fed by `job`, one entry per communication"""
        return [comm.target for comm in self._index(self._out_edges, job)]

    def get_indegree(self, job: JobLike) -> int:
        return len(self._index(self._in_edges, job))

    def get_indegrees(self) -> dict[str, int]:
        return {name: len(edges) for name, edges in self._in_edges.items()}

    def find_cycle(self) -> list[str] | None:
        """Return the names of jobs forming a cycle, or None if the graph is acyclic"""
        done: set[str] = set()
        for root in self._jobs:
            if root in done:
                continue
            path: list[str] = [root]
            on_path: set[str] = {root}
            todo: list[Iterator[Communication]] = [iter(self._out_edges[root])]

            while todo:
                descended = False
                for comm in todo[-1]:
                    child = comm.target
                    if child in on_path:
                        return path[path.index(child) :]
                    if child not in done:
                        path.append(child)
                        on_path.add(child)
                        todo.append(iter(self._out_edges[child]))
                        descended = True
                        break
                if descended:
                    continue

                todo.pop()
                name = path.pop()
                on_path.discard(name)
                done.add(name)

        return None

    def has_cycle(self) -> bool:
        """Check whether the graph contains cycles"""
        return self.find_cycle() is not None

    def validate(self) -> None:
        """Raise `CyclicGraphError` if the graph is not a DAG"""
        cycle = self.find_cycle()
        if cycle is not None:
            logger.error(f"graph is cyclic: {cycle=}")
            raise CyclicGraphError(cycle)

    def describe(self) -> str:
        """Human readable listing of jobs and their outgoing communications"""
        lines = []
        for job in self._jobs.values():
            lines.append(f"Job: {job.name} (Execution Time: {job.execution_time}):")
            for comm in self._out_edges[job.name]:
                lines.append(f"\t-> {comm.target} (Communication Time: {comm.comm_time})")
            lines.append("")
        return "\n".join(lines)
