from .base import AcliClient
from .board import BoardCommands
from .project import ProjectCommands
from .utils import with_temp_json
from .workitem import WorkitemCommands, build_create_payload, build_edit_payload

__all__ = [
    "AcliClient",
    "BoardCommands",
    "ProjectCommands",
    "WorkitemCommands",
    "build_create_payload",
    "build_edit_payload",
    "with_temp_json",
]
