from dataclasses import dataclass


@dataclass(frozen=True)
class Job:
    """A unit of work

    Params
    ------
    name: str, unique name of the job within its graph
    execution_time: int, duration of the job on any machine
    """

    name: str
    execution_time: int = 0

    def serialise(self) -> dict:
        return {"name": self.name, "execution_time": self.execution_time}


@dataclass(frozen=True)
class Communication:
    """Directed data dependency between two jobs

    Params
    ------
    source: str, name of the producing job
    target: str, name of the consuming job
    comm_time: int, transfer cost, only paid when source and target run on
        different machines
    """

    source: str
    target: str
    comm_time: int = 0

    def serialise(self) -> dict:
        return {"source": self.source, "target": self.target, "comm_time": self.comm_time}

    def __str__(self) -> str:
        return f"{self.source} -> {self.target} ({self.comm_time})"
