import pytest

from dagsched.errors import CyclicGraphError, DuplicateJobError, UnknownJobError
from dagsched.graph import Communication, Job, WorkflowGraph


def test_add_job():
    g = WorkflowGraph()
    job = g.add_job("A", 5)
    assert job == Job("A", 5)
    assert "A" in g
    assert job in g
    assert Job("A", 6) not in g
    assert len(g) == 1
    assert g.execution_time("A") == 5
    assert g.get_job(job) is job


def test_duplicate_job_leaves_graph_unchanged():
    g = WorkflowGraph()
    g.add_job("A", 5)
    with pytest.raises(DuplicateJobError):
        g.add_job("A", 7)
    assert g.execution_time("A") == 5
    assert len(g) == 1


@pytest.mark.parametrize("execution_time", [-1, 1.5, "3", True])
def test_invalid_execution_time(execution_time):
    g = WorkflowGraph()
    with pytest.raises(ValueError):
        g.add_job("A", execution_time)
    assert len(g) == 0


@pytest.mark.parametrize("source, target", [("A", "X"), ("X", "A"), ("X", "Y")])
def test_unknown_endpoint_leaves_graph_unchanged(source, target):
    g = WorkflowGraph()
    g.add_job("A", 1)
    with pytest.raises(UnknownJobError):
        g.add_communication(source, target, 1)
    assert list(g.edges()) == []
    assert g.get_indegrees() == {"A": 0}


def test_unknown_job_is_key_error():
    g = WorkflowGraph()
    with pytest.raises(KeyError):
        g.get_job("missing")
    with pytest.raises(UnknownJobError):
        g.get_in_edges("missing")


def test_negative_comm_time():
    g = WorkflowGraph()
    g.add_job("A", 1)
    g.add_job("B", 1)
    with pytest.raises(ValueError):
        g.add_communication("A", "B", -2)
    assert g.get_out_edges("A") == []


def test_edges_indexed_both_ways(example_graph):
    assert example_graph.get_out_edges("D") == [
        Communication("D", "E", 3),
        Communication("D", "F", 4),
    ]
    assert example_graph.get_in_edges("D") == [
        Communication("A", "D", 2),
        Communication("B", "D", 1),
        Communication("C", "D", 5),
    ]
    assert example_graph.get_predecessors("D") == ["A", "B", "C"]
    assert example_graph.get_successors("D") == ["E", "F"]
    assert example_graph.get_predecessors(Job("A", 5)) == []
    assert example_graph.get_successors("H") == []


def test_returned_edges_are_copies(example_graph):
    example_graph.get_out_edges("D").clear()
    assert len(example_graph.get_out_edges("D")) == 2


def test_parallel_edges_keep_multiplicity():
    g = WorkflowGraph()
    g.add_job("A", 1)
    g.add_job("B", 1)
    g.add_communication("A", "B", 1)
    g.add_communication("A", "B", 4)
    assert g.get_predecessors("B") == ["A", "A"]
    assert g.get_successors("A") == ["B", "B"]
    assert g.get_indegree("B") == 2


def test_indegrees(example_graph):
    assert example_graph.get_indegrees() == {
        "A": 0,
        "B": 0,
        "C": 0,
        "D": 3,
        "E": 1,
        "F": 1,
        "G": 2,
        "H": 1,
    }
    assert example_graph.get_indegree("G") == 2


def test_sources_and_sinks(example_graph):
    assert [j.name for j in example_graph.sources()] == ["A", "B", "C"]
    assert [j.name for j in example_graph.sinks()] == ["H"]


def test_iteration_order(example_graph):
    assert list(example_graph) == ["A", "B", "C", "D", "E", "F", "G", "H"]
    assert [j.name for j in example_graph.jobs()] == list(example_graph)
    assert len(list(example_graph.edges())) == 8


def test_equality(example_graph, rebuild_graph):
    assert example_graph == rebuild_graph(example_graph)
    assert example_graph != rebuild_graph(example_graph, {("A", "D"): 3})


def test_acyclic(example_graph):
    assert not example_graph.has_cycle()
    assert example_graph.find_cycle() is None
    example_graph.validate()


def test_cycle_detection():
    g = WorkflowGraph()
    for name in "ABCD":
        g.add_job(name, 1)
    g.add_communication("A", "B", 1)
    g.add_communication("B", "C", 1)
    g.add_communication("C", "D", 1)
    g.add_communication("D", "B", 1)
    assert g.has_cycle()
    assert g.find_cycle() == ["B", "C", "D"]
    with pytest.raises(CyclicGraphError) as excinfo:
        g.validate()
    assert excinfo.value.cycle == ["B", "C", "D"]
    assert "B -> C -> D -> B" in str(excinfo.value)


def test_self_loop():
    g = WorkflowGraph()
    g.add_job("A", 1)
    g.add_communication("A", "A", 0)
    assert g.find_cycle() == ["A"]


def test_diamond_is_not_a_cycle():
    g = WorkflowGraph()
    for name in "ABCD":
        g.add_job(name, 1)
    g.add_communication("A", "B", 1)
    g.add_communication("A", "C", 1)
    g.add_communication("B", "D", 1)
    g.add_communication("C", "D", 1)
    assert not g.has_cycle()


def test_describe(example_graph):
    text = example_graph.describe()
    assert "Job: D (Execution Time: 4):" in text
    assert "\t-> E (Communication Time: 3)" in text
    assert "\t-> F (Communication Time: 4)" in text
