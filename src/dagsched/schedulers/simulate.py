import datetime
import logging
from dataclasses import dataclass

import numpy as np
import randomname

from dagsched.errors import UnknownJobError
from dagsched.graph import WorkflowGraph
from dagsched.utility import EventLoop

logger = logging.getLogger(__name__)


@dataclass
class JobState:
    finished: bool = False
    start_time: int = 0
    end_time: int = 0

    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class MachineState:
    next_job_index: int = 0
    current_job: str | None = None
    end_time: int = 0
    idle_time: int = 0


class ExecutionReport:
    def __init__(
        self,
        allocation: dict[int, list[str]],
        jobs: dict[str, JobState],
        machines: dict[int, MachineState],
    ):
        self.allocation = allocation
        self.jobs = jobs
        self.machines = machines
        self.name = randomname.get_name()
        self.created_at = datetime.datetime.now(datetime.timezone.utc)

    def __repr__(self) -> str:
        str = f"============= Execution Report: {self.name} =============\n"
        str += f"Created at: {self.created_at}\n"
        for machine, state in self.machines.items():
            str += f"Machine {machine} completes at {state.end_time} ({state.idle_time} idle):\n"
            str += (
                " → ".join(f"{job} (end: {self.jobs[job].end_time})" for job in self.allocation[machine])
                + "\n"
            )
        str += "================================================\n"
        return str

    def start_time(self, job: str) -> int:
        return self.jobs[job].start_time

    def end_time(self, job: str) -> int:
        return self.jobs[job].end_time

    def makespan(self) -> int:
        return max((state.end_time for state in self.machines.values()), default=0)

    def cost(self) -> int:
        """Total time machines spend waiting between jobs"""
        return int(np.sum([state.idle_time for state in self.machines.values()]))


class Simulator:
    """
    Replays a machine allocation of a workflow graph.

    Each machine runs its jobs in the given order. A job starts once the
    machine is free and the data of all its predecessors has arrived:
    immediately for predecessors on the same machine, after the communication
    time for the others.
    """

    class State:
        def __init__(self, graph: WorkflowGraph, allocation: dict[int, list[str]]):
            self.graph = graph
            self.allocation = {machine: list(jobs) for machine, jobs in allocation.items()}
            self.machine_of: dict[str, int] = {}
            for machine, jobs in self.allocation.items():
                for job in jobs:
                    if job not in graph:
                        raise UnknownJobError(job)
                    if job in self.machine_of:
                        raise ValueError(f"Job {job} allocated more than once")
                    self.machine_of[job] = machine
            missing = [job for job in graph if job not in self.machine_of]
            if missing:
                raise ValueError(f"Jobs {missing} are not allocated to any machine")

            self.jobs = {job: JobState() for job in graph}
            self.machines = {machine: MachineState() for machine in self.allocation}
            self.ncompleted = 0
            self.sim = EventLoop()

    def __init__(self):
        self.state = None

    def data_ready_time(self, job: str, machine: int) -> int:
        ready = 0
        for comm in self.state.graph.get_in_edges(job):
            arrival = self.state.jobs[comm.source].end_time
            if self.state.machine_of[comm.source] != machine:
                arrival += comm.comm_time
            ready = max(ready, arrival)
        return ready

    def is_job_eligible(self, job: str) -> bool:
        return all(self.state.jobs[p].finished for p in self.state.graph.get_predecessors(job))

    def assign_job_to_machine(self, job: str, machine: int, time: int):
        machine_state = self.state.machines[machine]
        job_state = self.state.jobs[job]
        start_time = max(time, self.data_ready_time(job, machine))
        machine_state.idle_time += start_time - machine_state.end_time
        machine_state.current_job = job
        job_state.start_time = start_time
        job_state.end_time = start_time + self.state.graph.execution_time(job)
        machine_state.end_time = job_state.end_time
        machine_state.next_job_index += 1
        self.state.sim.add_event(job_state.end_time, self.on_job_complete, job, machine)
        logger.debug(f"job {job} runs on machine {machine} from {start_time} to {job_state.end_time}")

    def on_job_complete(self, time: int, job: str, machine: int):
        self.state.jobs[job].finished = True
        self.state.machines[machine].current_job = None
        self.state.ncompleted += 1
        self.assign_idle_machines(time)

    def assign_idle_machines(self, time: int):
        for machine, machine_state in self.state.machines.items():
            if machine_state.current_job is not None:
                continue
            jobs = self.state.allocation[machine]
            if machine_state.next_job_index >= len(jobs):
                continue
            next_job = jobs[machine_state.next_job_index]
            if self.is_job_eligible(next_job):
                self.assign_job_to_machine(next_job, machine, time)

    def execute(self, graph: WorkflowGraph, allocation: dict[int, list[str]]) -> ExecutionReport:
        """
        Execute `allocation` (machine -> ordered job names) of `graph`.

        Raises `ValueError` if jobs are missing or repeated, or if the
        allocation deadlocks, ie a machine waits on a job queued behind it.
        """
        self.state = Simulator.State(graph, allocation)
        self.assign_idle_machines(time=0)
        self.state.sim.run()

        if self.state.ncompleted != len(graph):
            stuck = [job for job, state in self.state.jobs.items() if not state.finished]
            raise ValueError(
                f"Allocation deadlocks after {self.state.ncompleted} of {len(graph)} jobs, never run: {stuck}"
            )
        return ExecutionReport(self.state.allocation, self.state.jobs, self.state.machines)
