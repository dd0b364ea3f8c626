"""
List scheduling onto K identical machines.

Jobs are taken in priority topological order and each one is committed, once
and for all, to the machine where it would finish earliest. A job's inputs are
free when produced on the same machine and cost the communication time
otherwise. The heuristic is greedy and single pass: no placement is ever
reconsidered and future communications are not anticipated.
"""

import logging
from dataclasses import dataclass, field
from time import perf_counter_ns

from dagsched.graph import WorkflowGraph

from .base import Scheduler
from .critical import critical_weights
from .schedule import Schedule, ScheduledJob, check_machine_count
from .toposort import priority_topological_sort

logger = logging.getLogger(__name__)


@dataclass
class AssignmentState:
    """Everything a single scheduling run mutates. Never shared between runs"""

    machine_finish: list[int]
    job_finish: dict[str, int] = field(default_factory=dict)
    job_machine: dict[str, int] = field(default_factory=dict)

    @classmethod
    def initial(cls, machine_count: int) -> "AssignmentState":
        return cls(machine_finish=[0] * machine_count)


def earliest_start(graph: WorkflowGraph, state: AssignmentState, job: str, machine: int) -> int:
    """Earliest time `job` can start on `machine`, given all placements so far"""
    start = state.machine_finish[machine]
    for comm in graph.get_in_edges(job):
        arrival = state.job_finish[comm.source]
        if state.job_machine[comm.source] != machine:
            arrival += comm.comm_time
        start = max(start, arrival)
    return start


def place(graph: WorkflowGraph, state: AssignmentState, job: str) -> tuple[ScheduledJob, AssignmentState]:
    """Commit `job` to the machine finishing it earliest, lowest index on ties. Mutates the state"""
    execution_time = graph.execution_time(job)
    starts = [earliest_start(graph, state, job, machine) for machine in range(len(state.machine_finish))]
    machine = min(range(len(starts)), key=lambda m: (starts[m] + execution_time, m))
    start = starts[machine]
    finish = start + execution_time

    scheduled = ScheduledJob(
        job=job,
        machine=machine,
        schedule_time=state.machine_finish[machine],
        start_time=start,
        finish_time=finish,
    )
    state.machine_finish[machine] = finish
    state.job_finish[job] = finish
    state.job_machine[job] = machine
    return scheduled, state


class ListScheduler(Scheduler):
    """
    Critical-weight list scheduler.

    Params
    ------
    check_acyclic: bool, verify the graph is a DAG before scheduling and raise
        `CyclicGraphError` naming the cycle. When disabled, a cycle is still
        reported, but only once the critical weights hit it
    """

    def __init__(self, check_acyclic: bool = True):
        self.check_acyclic = check_acyclic

    def schedule(self, graph: WorkflowGraph, machine_count: int) -> Schedule:
        """
        Schedule all jobs of `graph` onto `machine_count` identical machines.

        Params
        ------
        graph: WorkflowGraph, only read, may be shared between concurrent calls
        machine_count: int, at least 1

        Returns
        -------
        Schedule, with jobs in placement order
        """
        check_machine_count(machine_count)
        if self.check_acyclic:
            graph.validate()

        begin = perf_counter_ns()
        weights = critical_weights(graph)
        order = priority_topological_sort(graph, weights)

        state = AssignmentState.initial(machine_count)
        jobs: list[ScheduledJob] = []
        for name in order:
            scheduled, state = place(graph, state, name)
            logger.debug(
                f"placed {name} on machine {scheduled.machine}: "
                f"start={scheduled.start_time} finish={scheduled.finish_time}"
            )
            jobs.append(scheduled)

        result = Schedule(jobs, machine_count)
        end = perf_counter_ns()
        logger.info(
            f"scheduled {len(jobs)} jobs on {machine_count} machines, makespan {result.makespan}, "
            f"took {(end - begin) / 1e6:.3f}ms"
        )
        return result


def schedule(graph: WorkflowGraph, machine_count: int, check_acyclic: bool = True) -> Schedule:
    """Schedule `graph` onto `machine_count` machines with the default `ListScheduler`"""
    return ListScheduler(check_acyclic=check_acyclic).schedule(graph, machine_count)
