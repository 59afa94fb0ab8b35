"""Per-resolution push test evaluation.

An Evaluation is created for each resolution call and discarded afterwards.
It schedules rule-level push tests as asyncio tasks bounded by a semaphore,
applies the configured timeout, and memoizes results so a push test object
evaluated by several rules runs once per push.

Nothing here is shared between resolutions: concurrent pushes each get
their own semaphore, memo and task set.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from pushgoals.exceptions import PredicateEvaluationError, PredicateTimeoutError

if TYPE_CHECKING:
    from pushgoals.models.config import EngineConfig
    from pushgoals.models.push import PushContext
    from pushgoals.predicates.protocols import PushTest

logger = logging.getLogger(__name__)


class Evaluation:
    """Evaluates push tests against one PushContext.

    Use as an async context manager so leftover tasks are cancelled::

        async with Evaluation(ctx, config) as ev:
            matched = await ev.test(IsNode, rule_name="node build")
    """

    def __init__(self, ctx: PushContext, config: EngineConfig) -> None:
        self.ctx = ctx
        self.speculative = config.speculative
        self.max_concurrency = config.max_concurrency
        self._timeout = config.predicate_timeout
        self._semaphore = asyncio.Semaphore(config.max_concurrency)
        self._tasks: dict[int, asyncio.Task[bool]] = {}

    async def __aenter__(self) -> Evaluation:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def schedule(self, test: PushTest) -> asyncio.Task[bool]:
        """Start (or reuse) the evaluation task for *test*."""
        key = id(test)
        task = self._tasks.get(key)
        if task is None:
            task = asyncio.ensure_future(self._run(test))
            self._tasks[key] = task
        return task

    async def test(self, test: PushTest, *, rule_name: str | None = None) -> bool:
        """Evaluate *test*, attributing any failure to *rule_name*."""
        try:
            return await self.schedule(test)
        except PredicateEvaluationError as exc:
            if rule_name is not None and exc.rule_name is None:
                raise exc.in_rule(rule_name) from exc
            raise

    def discard(self, tests: Iterable[PushTest]) -> None:
        """Cancel unfinished evaluations of *tests* without waiting for them.

        Finished results stay memoized; discarded ones are re-run if asked
        for again.
        """
        for test in tests:
            task = self._tasks.get(id(test))
            if task is not None and not task.done():
                del self._tasks[id(test)]
                task.cancel()
                logger.debug("Discarded speculative evaluation of '%s'", test.name)

    def close(self) -> None:
        """Cancel pending tasks and mark finished failures as retrieved."""
        for task in self._tasks.values():
            if not task.done():
                task.cancel()
            elif not task.cancelled():
                task.exception()
        self._tasks.clear()

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def _run(self, test: PushTest) -> bool:
        async with self._semaphore:
            if self._timeout is None:
                result = await self._evaluate(test)
            else:
                try:
                    result = await asyncio.wait_for(
                        self._evaluate(test), self._timeout
                    )
                except asyncio.TimeoutError as exc:
                    raise PredicateTimeoutError(
                        test.name, timeout=self._timeout, cause=exc
                    ) from exc
        logger.debug("Push test '%s' -> %s", test.name, result)
        return bool(result)

    async def _evaluate(self, test: PushTest) -> bool:
        # Errors raised by the push test itself, TimeoutError included, are
        # wrapped here so only the engine's own deadline reaches _run.
        try:
            return await test.evaluate(self.ctx)
        except PredicateEvaluationError:
            raise
        except Exception as exc:
            raise PredicateEvaluationError(test.name, cause=exc) from exc
