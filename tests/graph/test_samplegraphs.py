import pytest

from dagsched.graph import samplegraphs


def test_empty():
    assert len(samplegraphs.empty()) == 0


def test_example():
    g = samplegraphs.example()
    assert len(g) == 8
    assert sum(j.execution_time for j in g.jobs()) == 33
    assert not g.has_cycle()


@pytest.mark.parametrize("njobs", [1, 2, 6])
def test_linear(njobs):
    g = samplegraphs.linear(njobs, execution_time=2, comm_time=3)
    assert len(g) == njobs
    assert len(list(g.edges())) == njobs - 1
    assert [j.name for j in g.sources()] == ["job-0"]
    assert [j.name for j in g.sinks()] == [f"job-{njobs - 1}"]


def test_fork_join():
    g = samplegraphs.fork_join(3)
    assert len(g) == 5
    assert g.get_successors("fork") == ["worker-0", "worker-1", "worker-2"]
    assert g.get_predecessors("join") == ["worker-0", "worker-1", "worker-2"]


def test_layered():
    g = samplegraphs.layered(nlayers=3, width=2)
    assert len(g) == 6
    assert len(list(g.edges())) == 2 * 2 * 2
    assert g.get_indegree("layer-2.1") == 2
    assert not g.has_cycle()
