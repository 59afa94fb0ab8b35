"""PushTest ABC -- base class for all push predicates.

A push test is a named, asynchronous boolean function over a PushContext.
Leaf tests wrap a function; composite tests (AllOf, AnyOf, Not) own their
operands. Tests never mutate the context and are built once at start-up.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Union, overload

from pushgoals.exceptions import PredicateEvaluationError

if TYPE_CHECKING:
    from pushgoals.models.push import PushContext

PushTestFn = Callable[["PushContext"], Union[Awaitable[bool], bool]]


class PushTest(ABC):
    """Abstract base class for push predicates.

    Example::

        class HasReadme(PushTest):
            @property
            def name(self) -> str:
                return "has-readme"

            async def evaluate(self, ctx: PushContext) -> bool:
                return await ctx.project.file_exists("README.md")
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name used in logs and error messages."""
        ...

    @abstractmethod
    async def evaluate(self, ctx: PushContext) -> bool:
        """Return True if the push satisfies this test.

        May perform I/O through ``ctx.project``. Errors propagate; they are
        never converted to False.
        """
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class PredicatePushTest(PushTest):
    """Leaf push test backed by a plain or async function.

    Exceptions raised by the function are wrapped in
    PredicateEvaluationError naming this test.
    """

    def __init__(self, name: str, fn: PushTestFn) -> None:
        self._name = name
        self._fn = fn

    @property
    def name(self) -> str:
        return self._name

    async def evaluate(self, ctx: PushContext) -> bool:
        try:
            result = self._fn(ctx)
            if inspect.isawaitable(result):
                result = await result
        except PredicateEvaluationError:
            raise
        except Exception as exc:
            raise PredicateEvaluationError(self._name, cause=exc) from exc
        return bool(result)


@overload
def push_test(fn: PushTestFn, /) -> PushTest: ...


@overload
def push_test(name: str | None = None) -> Callable[[PushTestFn], PushTest]: ...


def push_test(fn_or_name=None):
    """Turn a function into a PushTest.

    Usable bare (``@push_test``) or with a name (``@push_test("is-node")``).
    Without a name the function name is used.
    """
    if callable(fn_or_name):
        return PredicatePushTest(fn_or_name.__name__, fn_or_name)

    def decorator(fn: PushTestFn) -> PushTest:
        return PredicatePushTest(fn_or_name or fn.__name__, fn)

    return decorator
