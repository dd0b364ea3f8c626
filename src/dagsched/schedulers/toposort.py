import heapq
import logging

from dagsched.errors import CyclicGraphError
from dagsched.graph import WorkflowGraph

from .critical import critical_weights

logger = logging.getLogger(__name__)


def priority_topological_sort(graph: WorkflowGraph, weights: dict[str, int] | None = None) -> list[str]:
    """
    Order jobs so that every job comes after all its predecessors.

    Jobs become ready once all their incoming communications come from
    already ordered jobs. Among ready jobs, the one with the highest critical
    weight is ordered first, so long downstream chains start as early as
    possible. Ties go to the job inserted first into the graph.

    Params
    ------
    graph: WorkflowGraph
    weights: dict of job name to priority, defaults to `critical_weights(graph)`

    Returns
    -------
    list of job names, containing every job exactly once

    Raises `CyclicGraphError` if some jobs never become ready.
    """
    if weights is None:
        weights = critical_weights(graph)
    rank = {name: index for index, name in enumerate(graph)}

    # private working copy, the graph itself is never touched
    remaining = graph.get_indegrees()
    ready = [(-weights[name], rank[name], name) for name, indegree in remaining.items() if indegree == 0]
    heapq.heapify(ready)

    order: list[str] = []
    while ready:
        _, _, name = heapq.heappop(ready)
        order.append(name)
        for successor in graph.get_successors(name):
            remaining[successor] -= 1
            if remaining[successor] == 0:
                heapq.heappush(ready, (-weights[successor], rank[successor], successor))

    if len(order) != len(graph):
        blocked = [name for name, indegree in remaining.items() if indegree > 0]
        raise CyclicGraphError(
            message=f"Ordered {len(order)} jobs out of {len(graph)}, jobs on or behind a cycle: {blocked}"
        )
    logger.debug(f"priority order {order=}")
    return order
