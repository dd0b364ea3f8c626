from dataclasses import dataclass
from typing import Iterator

import numpy as np
import randomname

from dagsched.errors import InvalidMachineCountError, UnknownJobError
from dagsched.graph import JobLike, WorkflowGraph, job_name


def check_machine_count(machine_count: int) -> int:
    if isinstance(machine_count, bool) or not isinstance(machine_count, int) or machine_count < 1:
        raise InvalidMachineCountError(machine_count)
    return machine_count


@dataclass(frozen=True)
class ScheduledJob:
    """Placement of one job

    Params
    ------
    job: str, name of the job
    machine: int, machine index in 0..K-1
    schedule_time: int, finish time of the machine before this job was placed
    start_time: int, when the job starts
    finish_time: int, when the job ends
    """

    job: str
    machine: int
    schedule_time: int
    start_time: int
    finish_time: int

    @property
    def duration(self) -> int:
        return self.finish_time - self.start_time

    @property
    def wait_time(self) -> int:
        """Time the machine sits idle waiting for this job's inputs"""
        return self.start_time - self.schedule_time


class Schedule:
    """Result of scheduling a workflow onto identical machines

    Unpacks as ``makespan, jobs = schedule``.
    """

    def __init__(self, jobs: list[ScheduledJob], machines: int):
        check_machine_count(machines)
        self.jobs = list(jobs)
        self.machines = machines
        self.name = randomname.get_name()
        self._by_job = {scheduled.job: scheduled for scheduled in self.jobs}

    def __iter__(self) -> Iterator:
        yield self.makespan
        yield self.jobs

    def __len__(self) -> int:
        return len(self.jobs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schedule):
            return NotImplemented
        return self.machines == other.machines and self.jobs == other.jobs

    def __repr__(self) -> str:
        str = f"============= Schedule: {self.name} =============\n"
        str += f"Makespan {self.makespan} on {self.machines} machines\n"
        allocation = self.allocation()
        for machine, finish in enumerate(self.machine_finish_times()):
            str += f"Machine {machine} completes at {finish}:\n"
            str += (
                " → ".join(
                    f"{name} ({self._by_job[name].start_time}-{self._by_job[name].finish_time})"
                    for name in allocation[machine]
                )
                + "\n"
            )
        str += "================================================\n"
        return str

    @property
    def order(self) -> list[str]:
        """Job names in the order they were placed"""
        return [scheduled.job for scheduled in self.jobs]

    @property
    def makespan(self) -> int:
        return max(self.machine_finish_times())

    def get(self, job: JobLike) -> ScheduledJob:
        name = job_name(job)
        try:
            return self._by_job[name]
        except KeyError:
            raise UnknownJobError(name) from None

    def machine_of(self, job: JobLike) -> int:
        return self.get(job).machine

    def allocation(self) -> dict[int, list[str]]:
        """Ordered job names per machine, every machine included"""
        allocation: dict[int, list[str]] = {machine: [] for machine in range(self.machines)}
        for scheduled in self.jobs:
            allocation[scheduled.machine].append(scheduled.job)
        return allocation

    def machine_finish_times(self) -> list[int]:
        finish = np.zeros(self.machines, dtype=np.int64)
        for scheduled in self.jobs:
            finish[scheduled.machine] = max(finish[scheduled.machine], scheduled.finish_time)
        return [int(f) for f in finish]

    def utilisation(self) -> np.ndarray:
        """Busy fraction of each machine over the makespan"""
        busy = np.zeros(self.machines, dtype=float)
        for scheduled in self.jobs:
            busy[scheduled.machine] += scheduled.duration
        makespan = self.makespan
        if makespan == 0:
            return busy
        return busy / makespan

    def check(self, graph: WorkflowGraph) -> None:
        """
        Check that the schedule is a feasible execution of `graph`: every job
        placed once with its own duration, no overlap on a machine, and every
        communication respected, paying its cost across machines only.

        Raises `ValueError` describing the first violation.
        """
        if sorted(self._by_job) != sorted(graph) or len(self.jobs) != len(graph):
            raise ValueError(f"Schedule {self.name} does not place every job of the graph exactly once")
        for scheduled in self.jobs:
            if not 0 <= scheduled.machine < self.machines:
                raise ValueError(f"Job {scheduled.job} placed on unknown machine {scheduled.machine}")
            if scheduled.duration != graph.execution_time(scheduled.job):
                raise ValueError(f"Job {scheduled.job} runs for {scheduled.duration}")
            if scheduled.start_time < scheduled.schedule_time:
                raise ValueError(f"Job {scheduled.job} starts before its machine is free")
        for machine, names in self.allocation().items():
            placed = sorted((self._by_job[name] for name in names), key=lambda s: (s.start_time, s.finish_time))
            for previous, current in zip(placed, placed[1:]):
                if current.start_time < previous.finish_time:
                    raise ValueError(f"Jobs {previous.job} and {current.job} overlap on machine {machine}")
        for comm in graph.edges():
            source, target = self._by_job[comm.source], self._by_job[comm.target]
            arrival = source.finish_time + (0 if source.machine == target.machine else comm.comm_time)
            if target.start_time < arrival:
                raise ValueError(f"Job {target.job} starts at {target.start_time} before data from {source.job}")
