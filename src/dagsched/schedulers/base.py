from abc import ABC, abstractmethod

from dagsched.graph import WorkflowGraph

from .schedule import Schedule


class Scheduler(ABC):
    @abstractmethod
    def schedule(self, graph: WorkflowGraph, machine_count: int) -> Schedule:
        pass
