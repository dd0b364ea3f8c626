import numpy as np
import pytest

from dagsched.errors import InvalidMachineCountError, UnknownJobError
from dagsched.schedulers import Schedule, ScheduledJob, schedule


def test_scheduled_job_properties():
    scheduled = ScheduledJob("D", 0, 8, 9, 13)
    assert scheduled.duration == 4
    assert scheduled.wait_time == 1


def test_machine_finish_times(example_graph):
    result = schedule(example_graph, 3)
    assert result.machine_finish_times() == [25, 5, 3]
    assert result.makespan == 25


def test_idle_machine_counts_as_zero(example_graph):
    result = schedule(example_graph, 2)
    assert Schedule(result.jobs, 4).machine_finish_times() == [26, 8, 0, 0]


def test_utilisation(example_graph):
    result = schedule(example_graph, 2)
    np.testing.assert_allclose(result.utilisation(), [25 / 26, 8 / 26])


def test_utilisation_empty():
    np.testing.assert_allclose(Schedule([], 2).utilisation(), [0.0, 0.0])


def test_lookup(example_graph):
    result = schedule(example_graph, 2)
    assert result.get("D") == ScheduledJob("D", 0, 8, 9, 13)
    assert result.machine_of("A") == 1
    with pytest.raises(UnknownJobError):
        result.get("Z")
    with pytest.raises(KeyError):
        result.machine_of("Z")


def test_equality_ignores_name(example_graph):
    first, second = schedule(example_graph, 2), schedule(example_graph, 2)
    second.name = first.name + "-other"
    assert first == second
    assert first != schedule(example_graph, 3)


def test_repr(example_graph):
    text = repr(schedule(example_graph, 2))
    assert "Makespan 26 on 2 machines" in text
    assert "Machine 1 completes at 8:" in text
    assert "A (0-5) → B (5-8)" in text


@pytest.mark.parametrize("machines", [0, -3])
def test_invalid_machines(machines):
    with pytest.raises(InvalidMachineCountError):
        Schedule([], machines)


def test_check_detects_overlap(example_graph):
    jobs = schedule(example_graph, 2).jobs
    jobs[2] = ScheduledJob("B", 1, 4, 4, 7)
    with pytest.raises(ValueError, match="overlap"):
        Schedule(jobs, 2).check(example_graph)


def test_check_detects_missing_communication(example_graph):
    jobs = schedule(example_graph, 2).jobs
    # D on machine 0 cannot start before data from A and B on machine 1
    jobs[3] = ScheduledJob("D", 0, 8, 8, 12)
    with pytest.raises(ValueError, match="before data"):
        Schedule(jobs, 2).check(example_graph)


def test_check_detects_missing_job(example_graph):
    jobs = schedule(example_graph, 2).jobs[:-1]
    with pytest.raises(ValueError, match="exactly once"):
        Schedule(jobs, 2).check(example_graph)
