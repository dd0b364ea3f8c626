"""
Exceptions raised while building or scheduling a workflow graph.

All of them derive from the matching built-in (`ValueError` or `KeyError`), so
callers catching the built-ins keep working.
"""


class DuplicateJobError(ValueError):
    def __init__(self, name: str):
        super().__init__(f"Job {name!r} already exists in the graph")
        self.name = name


class UnknownJobError(KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Job {self.name!r} not found in the graph"


class CyclicGraphError(ValueError):
    def __init__(self, cycle: list[str] | None = None, message: str | None = None):
        if message is None:
            if cycle:
                message = "Graph contains a cycle: " + " -> ".join(cycle + cycle[:1])
            else:
                message = "Graph contains a cycle"
        super().__init__(message)
        self.cycle = cycle


class InvalidMachineCountError(ValueError):
    def __init__(self, machine_count):
        super().__init__(f"Machine count must be a positive integer, got {machine_count!r}")
        self.machine_count = machine_count
