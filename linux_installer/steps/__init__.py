from .message import MessageStep
from .prompt import PromptStep
from .run_command import RunCommandStep

__all__ = [
    "MessageStep",
    "PromptStep",
    "RunCommandStep",
]
