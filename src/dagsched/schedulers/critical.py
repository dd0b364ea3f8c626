"""
Critical weight of a job: the longest accumulated execution + communication
time over any path from that job to a terminal job,

    weight(job) = execution_time(job) + max(0, max over out edges e of (comm_time(e) + weight(target(e))))

It is a static, graph-only priority signal: machine assignments are not taken
into account.
"""

import logging
import math
from typing import Iterable, Iterator

from dagsched.errors import CyclicGraphError
from dagsched.graph import Communication, JobLike, WorkflowGraph, job_name

from .schedule import check_machine_count

logger = logging.getLogger(__name__)


def _accumulate(
    graph: WorkflowGraph,
    roots: Iterable[str],
    weights: dict[str, int],
    with_communication: bool,
) -> dict[str, int]:
    # iterative post-order dfs, each job is finalised once all its successors are
    for root in roots:
        if root in weights:
            continue
        path: list[str] = [root]
        on_path: set[str] = {root}
        todo: list[Iterator[Communication]] = [iter(graph.get_out_edges(root))]

        while todo:
            descended = False
            for comm in todo[-1]:
                child = comm.target
                if child in weights:
                    continue
                if child in on_path:
                    raise CyclicGraphError(path[path.index(child) :])
                path.append(child)
                on_path.add(child)
                todo.append(iter(graph.get_out_edges(child)))
                descended = True
                break
            if descended:
                continue

            todo.pop()
            name = path.pop()
            on_path.discard(name)
            tail = max(
                (
                    (comm.comm_time if with_communication else 0) + weights[comm.target]
                    for comm in graph.get_out_edges(name)
                ),
                default=0,
            )
            weights[name] = graph.execution_time(name) + max(0, tail)
    return weights


def critical_weights(graph: WorkflowGraph, with_communication: bool = True) -> dict[str, int]:
    """
    Calculate the critical weight of every job in the graph, in O(V + E).

    Params
    ------
    graph: WorkflowGraph
    with_communication: bool, if False communication costs are ignored and the
        weight is the longest execution-time-only path

    Returns
    -------
    dict of job name to critical weight

    Raises `CyclicGraphError` if the graph contains a cycle.
    """
    weights = _accumulate(graph, graph, {}, with_communication)
    logger.debug(f"critical weights {weights=}")
    return weights


def critical_weight(graph: WorkflowGraph, job: JobLike, with_communication: bool = True) -> int:
    """Critical weight of a single job, only visiting the jobs reachable from it"""
    name = job_name(job)
    graph.get_job(name)
    return _accumulate(graph, [name], {}, with_communication)[name]


def makespan_lower_bound(graph: WorkflowGraph, machine_count: int) -> int:
    """
    Lower bound on the makespan of any schedule of the graph onto
    `machine_count` machines: neither the longest execution-only chain nor the
    total work spread evenly over all machines can be beaten.
    """
    check_machine_count(machine_count)
    if len(graph) == 0:
        return 0
    longest_chain = max(critical_weights(graph, with_communication=False).values())
    total = sum(job.execution_time for job in graph.jobs())
    return max(longest_chain, math.ceil(total / machine_count))
