"""AppBuilder process core.

Shared task and trigger model for business processes:
- task definitions with declared, serializable fields
- per-instance task state slots
- a string-keyed data resolution protocol between tasks
"""

__version__ = "0.1.0"

from appbuilder_process.application import Application
from appbuilder_process.config import ProcessSettings
from appbuilder_process.process.definition import ProcessDefinition
from appbuilder_process.process.instance import ProcessInstance
from appbuilder_process.process.runner import ProcessRunner

__all__ = [
    "__version__",
    "Application",
    "ProcessDefinition",
    "ProcessInstance",
    "ProcessRunner",
    "ProcessSettings",
]
