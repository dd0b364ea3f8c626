import networkx as nx

from .graph import WorkflowGraph


def to_networkx(graph: WorkflowGraph) -> nx.MultiDiGraph:
    g = nx.MultiDiGraph()
    for job in graph.jobs():
        g.add_node(job.name, execution_time=job.execution_time)
    g.add_edges_from((comm.source, comm.target, {"comm_time": comm.comm_time}) for comm in graph.edges())
    return g


def from_networkx(g: nx.DiGraph) -> WorkflowGraph:
    """Build a workflow graph from a networkx graph

    Nodes may carry an ``execution_time`` attribute and edges a ``comm_time``
    attribute, both defaulting to 0. Works with both `nx.DiGraph` and
    `nx.MultiDiGraph`.
    """
    graph = WorkflowGraph()
    for node, data in g.nodes(data=True):
        graph.add_job(node, data.get("execution_time", 0))
    for source, target, data in g.edges(data=True):
        graph.add_communication(source, target, data.get("comm_time", 0))
    return graph


def topological_layout(g: nx.MultiDiGraph) -> dict[str, list[float]]:
    pos = {}
    for i, gen in enumerate(nx.topological_generations(g)):
        for j, node in enumerate(sorted(gen)):
            pos[node] = [float(j), -float(i)]
    return pos
