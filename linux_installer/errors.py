from __future__ import annotations


class PipelineError(RuntimeError):
    """Base class for sequencer errors."""


class PipelineConfigError(PipelineError):
    """The pipeline was used out of order (registration after start, double start...)."""
