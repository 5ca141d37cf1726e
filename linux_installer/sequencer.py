"""Step sequencing engine.

A ``Sequencer`` holds an ordered list of entries. An entry is either one
``Step`` or a parallel group of Steps. The run advances a cursor over the
entries; every Step reports through a single-fire ``Completion`` and the first
failure anywhere routes to the one error handler and ends the run.

Everything runs on one asyncio loop. Steps must signal from that loop.
"""

from __future__ import annotations

import abc
import asyncio
import enum
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Tuple, Union

from .errors import PipelineConfigError

logger = logging.getLogger(__name__)


class RunState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    FAULTED = "faulted"
    COMPLETED = "completed"

    @property
    def terminal(self) -> bool:
        return self in (RunState.FAULTED, RunState.COMPLETED)


# Outcome delivered through a Completion future: (succeeded, value_or_error).
Outcome = Tuple[bool, Any]


class Completion:
    """Single-fire success/failure signal handed to a running Step.

    Only the first call to ``ok`` or ``fail`` counts; later calls return False.
    """

    def __init__(self, step_id: str, future: "asyncio.Future[Outcome]") -> None:
        self.step_id = step_id
        self._future = future

    @property
    def signalled(self) -> bool:
        return self._future.done()

    def ok(self, value: Any = None) -> bool:
        return self._signal((True, value))

    def fail(self, error: Any) -> bool:
        return self._signal((False, error))

    def _signal(self, outcome: Outcome) -> bool:
        if self._future.done():
            logger.debug("Ignoring repeated signal from step %s", self.step_id)
            return False
        self._future.set_result(outcome)
        return True


class Step(abc.ABC):
    """A unit of work that signals ``done`` exactly once, now or later."""

    step_id: str = ""

    @abc.abstractmethod
    def start(self, done: Completion, value: Any) -> None:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.step_id or '?'}>"


class FunctionStep(Step):
    """Adapt a plain or coroutine function.

    The return value is the success value; a raised exception is the failure.
    Functions taking no parameters are called without the previous value.
    """

    def __init__(self, fn: Callable[..., Any], step_id: Optional[str] = None) -> None:
        self.fn = fn
        self.step_id = step_id or getattr(fn, "__name__", type(fn).__name__)
        try:
            self._takes_value = bool(inspect.signature(fn).parameters)
        except (TypeError, ValueError):
            self._takes_value = True
        self._task: Optional[asyncio.Task] = None

    def _call(self, value: Any) -> Any:
        return self.fn(value) if self._takes_value else self.fn()

    def start(self, done: Completion, value: Any) -> None:
        try:
            result = self._call(value)
        except Exception as e:
            done.fail(e)
            return

        if inspect.isawaitable(result):
            self._task = asyncio.ensure_future(self._finish(done, result))
        else:
            done.ok(result)

    @staticmethod
    async def _finish(done: Completion, pending: Awaitable[Any]) -> None:
        try:
            result = await pending
        except Exception as e:
            done.fail(e)
        else:
            done.ok(result)


class CallbackStep(Step):
    """Adapt ``fn(done, value)``; the function signals ``done`` itself."""

    def __init__(self, fn: Callable[[Completion, Any], None], step_id: Optional[str] = None) -> None:
        self.fn = fn
        self.step_id = step_id or getattr(fn, "__name__", type(fn).__name__)

    def start(self, done: Completion, value: Any) -> None:
        self.fn(done, value)


StepLike = Union[Step, Callable[..., Any]]
ErrorHandler = Callable[[Any], Any]


def as_step(obj: StepLike) -> Step:
    if isinstance(obj, Step):
        return obj
    if callable(obj):
        return FunctionStep(obj)
    raise TypeError(f"Not a step: {obj!r}")


def callback_step(fn: Callable[[Completion, Any], None]) -> CallbackStep:
    """Decorator form of ``CallbackStep``."""
    return CallbackStep(fn)


@dataclass(frozen=True)
class Entry:
    steps: Tuple[Step, ...]
    parallel: bool = False

    @property
    def label(self) -> str:
        ids = ", ".join(s.step_id for s in self.steps)
        return f"parallel({ids})" if self.parallel else ids


@dataclass(frozen=True)
class ErrorRecord:
    step_id: str
    position: int
    error: Any


@dataclass
class PipelineState:
    entries: List[Entry] = field(default_factory=list)
    cursor: int = 0
    state: RunState = RunState.IDLE
    error: Optional[ErrorRecord] = None
    value: Any = None


class Sequencer:
    """Ordered/parallel step pipeline with a single error channel.

    Registration methods return the Sequencer so a pipeline reads as a list::

        Sequencer().then(a).parallel(b, c).then(d).on_error(report).start()
    """

    def __init__(self) -> None:
        self._pipeline = PipelineState()
        self._on_error: Optional[ErrorHandler] = None

    @property
    def pipeline(self) -> PipelineState:
        return self._pipeline

    @property
    def state(self) -> RunState:
        return self._pipeline.state

    def _check_idle(self) -> None:
        if self._pipeline.state is not RunState.IDLE:
            raise PipelineConfigError(f"Pipeline already {self._pipeline.state.value}")

    def then(self, step: StepLike) -> "Sequencer":
        self._check_idle()
        self._pipeline.entries.append(Entry(steps=(as_step(step),)))
        return self

    def parallel(self, *steps: StepLike) -> "Sequencer":
        self._check_idle()
        self._pipeline.entries.append(Entry(steps=tuple(as_step(s) for s in steps), parallel=True))
        return self

    def on_error(self, handler: ErrorHandler) -> "Sequencer":
        self._check_idle()
        if not callable(handler):
            raise TypeError(f"Error handler must be callable, got {handler!r}")
        if self._on_error is not None:
            logger.debug("Replacing error handler %r", self._on_error)
        self._on_error = handler
        return self

    def start(self) -> PipelineState:
        """Run the pipeline on a fresh event loop until it is terminal."""
        return asyncio.run(self.run())

    def schedule(self) -> "asyncio.Task[PipelineState]":
        """Start the pipeline on the running loop and return immediately."""
        loop = asyncio.get_running_loop()
        self._begin()
        return loop.create_task(self._drive())

    async def run(self) -> PipelineState:
        self._begin()
        return await self._drive()

    def _begin(self) -> None:
        self._check_idle()
        self._pipeline.state = RunState.RUNNING

    async def _drive(self) -> PipelineState:
        p = self._pipeline
        value: Any = None
        while p.cursor < len(p.entries):
            entry = p.entries[p.cursor]
            logger.info("Running step %s", entry.label)

            if entry.parallel:
                ok, payload, failed = await self._run_group(entry, value)
            else:
                failed = entry.steps[0]
                ok, payload = await self._run_one(failed, value)

            if not ok:
                await self._fault(ErrorRecord(step_id=failed.step_id, position=p.cursor, error=payload))
                return p

            value = payload
            p.cursor += 1

        p.value = value
        p.state = RunState.COMPLETED
        logger.info("Pipeline completed (%d entries)", len(p.entries))
        return p

    @staticmethod
    def _launch(step: Step, value: Any) -> "asyncio.Future[Outcome]":
        future: asyncio.Future[Outcome] = asyncio.get_running_loop().create_future()
        done = Completion(step.step_id, future)
        try:
            step.start(done, value)
        except Exception as e:
            # Raising before signalling counts as the step's failure.
            if not done.fail(e):
                logger.warning("Step %s raised after signalling: %s", step.step_id, e)
        return future

    async def _run_one(self, step: Step, value: Any) -> Outcome:
        return await self._launch(step, value)

    async def _run_group(self, entry: Entry, value: Any) -> Tuple[bool, Any, Optional[Step]]:
        loop = asyncio.get_running_loop()
        gate: asyncio.Future[Tuple[bool, Any, Optional[Step]]] = loop.create_future()
        results: List[Any] = [None] * len(entry.steps)
        remaining = len(entry.steps)

        if remaining == 0:
            return True, (), None

        def _member_done(index: int, step: Step, future: "asyncio.Future[Outcome]") -> None:
            nonlocal remaining
            ok, payload = future.result()
            if gate.done():
                # Group already decided; siblings are not cancelled, just ignored.
                logger.debug("Ignoring late outcome of %s", step.step_id)
                return
            if not ok:
                gate.set_result((False, payload, step))
                return
            results[index] = payload
            remaining -= 1
            if remaining == 0:
                gate.set_result((True, tuple(results), None))

        for index, step in enumerate(entry.steps):
            future = self._launch(step, value)
            future.add_done_callback(lambda f, i=index, s=step: _member_done(i, s, f))

        return await gate

    async def _fault(self, record: ErrorRecord) -> None:
        p = self._pipeline
        p.error = record
        p.state = RunState.FAULTED

        if self._on_error is None:
            logger.error("Step %s failed: %s", record.step_id, record.error)
            return

        try:
            result = self._on_error(record.error)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Error handler failed while handling %s", record.step_id)
