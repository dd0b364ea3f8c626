from .graph import WorkflowGraph


def empty() -> WorkflowGraph:
    """Empty graph"""
    return WorkflowGraph()


def example() -> WorkflowGraph:
    """Reference eight-job workflow

    A(5), B(3), C(8) -> D(4) -> E(2), F(1) -> G(7) -> H(3)
    """
    graph = WorkflowGraph()
    for name, execution_time in [
        ("A", 5),
        ("B", 3),
        ("C", 8),
        ("D", 4),
        ("E", 2),
        ("F", 1),
        ("G", 7),
        ("H", 3),
    ]:
        graph.add_job(name, execution_time)
    for source, target, comm_time in [
        ("A", "D", 2),
        ("B", "D", 1),
        ("C", "D", 5),
        ("D", "E", 3),
        ("D", "F", 4),
        ("E", "G", 1),
        ("F", "G", 2),
        ("G", "H", 2),
    ]:
        graph.add_communication(source, target, comm_time)
    return graph


def linear(njobs: int = 5, execution_time: int = 1, comm_time: int = 1) -> WorkflowGraph:
    """Linear graph

    job-0 -> job-1 -> ... -> job-{njobs-1}
    """
    graph = WorkflowGraph()
    previous = None
    for i in range(njobs):
        job = graph.add_job(f"job-{i}", execution_time)
        if previous is not None:
            graph.add_communication(previous, job, comm_time)
        previous = job
    return graph


def fork_join(width: int = 4, execution_time: int = 1, comm_time: int = 1) -> WorkflowGraph:
    """Fork-join graph

    `fork` feeds `width` independent workers (worker-{i}), all joined by `join`
    """
    graph = WorkflowGraph()
    graph.add_job("fork", execution_time)
    for i in range(width):
        graph.add_job(f"worker-{i}", execution_time)
        graph.add_communication("fork", f"worker-{i}", comm_time)
    graph.add_job("join", execution_time)
    for i in range(width):
        graph.add_communication(f"worker-{i}", "join", comm_time)
    return graph


def layered(nlayers: int = 3, width: int = 3, execution_time: int = 1, comm_time: int = 1) -> WorkflowGraph:
    """Layered graph

    `nlayers` layers of `width` jobs (layer-{l}.{i}), every job of a layer
    feeding every job of the next one
    """
    graph = WorkflowGraph()
    previous: list[str] = []
    for layer in range(nlayers):
        current = [graph.add_job(f"layer-{layer}.{i}", execution_time).name for i in range(width)]
        for source in previous:
            for target in current:
                graph.add_communication(source, target, comm_time)
        previous = current
    return graph
