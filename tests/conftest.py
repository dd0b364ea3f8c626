import pytest

from dagsched.graph import WorkflowGraph
from dagsched.graph.samplegraphs import example


def rebuild(graph: WorkflowGraph, comm_times: dict[tuple[str, str], int] | None = None, default=None) -> WorkflowGraph:
    """Copy of `graph` with some communication times replaced"""
    comm_times = comm_times or {}
    new = WorkflowGraph()
    for job in graph.jobs():
        new.add_job(job.name, job.execution_time)
    for comm in graph.edges():
        comm_time = comm.comm_time if default is None else default
        new.add_communication(comm.source, comm.target, comm_times.get((comm.source, comm.target), comm_time))
    return new


@pytest.fixture(scope="function")
def example_graph():
    return example()


@pytest.fixture(scope="function")
def zero_comm_graph():
    return rebuild(example(), default=0)


@pytest.fixture(scope="function")
def rebuild_graph():
    return rebuild
