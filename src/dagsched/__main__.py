"""
Command line entrypoint

Example:
```
python -m dagsched schedule workflow.json --machines 3 --simulate
python -m dagsched example --machines 2
python -m dagsched describe workflow.json
```

Workflow files are JSON documents as written by `dagsched.graph.to_json`.
"""

import logging
import logging.config

import fire

from dagsched.config import SchedulerConfig, logging_config
from dagsched.graph import load, samplegraphs
from dagsched.schedulers import ListScheduler, Simulator

logger = logging.getLogger("dagsched.cli")


def main_schedule(path: str, machines: int = 2, simulate: bool = False, check_acyclic: bool = True) -> int:
    """Schedule the workflow stored at `path`, print the result and return the makespan"""
    logging.config.dictConfig(logging_config)
    config = SchedulerConfig(machines=machines, check_acyclic=check_acyclic)
    graph = load(path)
    logger.info(f"loaded {graph} from {path}")
    result = ListScheduler(check_acyclic=config.check_acyclic).schedule(graph, config.machines)
    print(result)
    if simulate:
        print(Simulator().execute(graph, result.allocation()))
    return result.makespan


def main_example(machines: int = 2) -> None:
    """Schedule the reference eight-job workflow"""
    logging.config.dictConfig(logging_config)
    config = SchedulerConfig(machines=machines)
    graph = samplegraphs.example()
    print("Workflow Graph:")
    print(graph.describe())
    result = ListScheduler().schedule(graph, config.machines)
    print("Scheduled Order: " + "".join(f"{name}-->" for name in result.order))
    print(f"\tMin Time: {result.makespan}")


def main_describe(path: str) -> None:
    """Print the jobs and communications of the workflow stored at `path`"""
    print(load(path).describe())


def main() -> None:
    fire.Fire({"schedule": main_schedule, "example": main_example, "describe": main_describe})


if __name__ == "__main__":
    main()
