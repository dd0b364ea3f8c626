import os

from pydantic import BaseModel, Field

LOG_LEVEL = os.environ.get("DAGSCHED_LOG_LEVEL", "INFO")

logging_config = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "default": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "default",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        "dagsched": {
            "level": LOG_LEVEL,
            "handlers": ["console"],
            "propagate": False,
        },
    },
}


class SchedulerConfig(BaseModel):
    machines: int = Field(2, ge=1, description="number of identical machines to schedule onto")
    check_acyclic: bool = Field(True, description="reject cyclic graphs before scheduling")
