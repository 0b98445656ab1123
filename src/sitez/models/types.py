# siteZ type definitions
# Rev 0.2.0

from __future__ import annotations
from enum import Enum
from typing import Literal, Union


class ProjectStatus(str, Enum):
    PLANNED = "Planned"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    DELAYED = "Delayed"


class TaskStatus(str, Enum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    DONE = "Done"


# Filter sentinel: "All" disables the status/client predicate
ALL = "All"
StatusFilter = Union[ProjectStatus, Literal["All"]]

AITool = Literal["schedule", "risk"]
