"""Linux installer scaffold (Python-first, step-driven).

Core design goals:
- Ordered and parallel installation steps
- Single error channel that stops the run
- Colored console progress and line prompts
- Collaborators passed in, never global
"""

from .errors import PipelineConfigError, PipelineError
from .installer import Installer
from .sequencer import Completion, ErrorRecord, PipelineState, RunState, Sequencer, Step

__all__ = [
    "Completion",
    "ErrorRecord",
    "Installer",
    "PipelineConfigError",
    "PipelineError",
    "PipelineState",
    "RunState",
    "Sequencer",
    "Step",
]
