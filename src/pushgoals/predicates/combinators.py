"""Push test combinators: AND, OR, NOT.

Operands are evaluated in declaration order so short-circuiting is
observable: ``all_of`` stops at the first false operand, ``any_of`` at the
first true one. ``all_of()`` is vacuously true and ``any_of()`` vacuously
false. Operand errors propagate unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pushgoals.predicates.protocols import PushTest

if TYPE_CHECKING:
    from pushgoals.models.push import PushContext


def _joined(op: str, tests: tuple[PushTest, ...]) -> str:
    return f"{op}({', '.join(t.name for t in tests)})"


class AllOf(PushTest):
    """Matches iff every operand matches."""

    def __init__(self, *tests: PushTest, name: str | None = None) -> None:
        self.tests = tests
        self._name = name or _joined("all_of", tests)

    @property
    def name(self) -> str:
        return self._name

    async def evaluate(self, ctx: PushContext) -> bool:
        for test in self.tests:
            if not await test.evaluate(ctx):
                return False
        return True


class AnyOf(PushTest):
    """Matches iff at least one operand matches."""

    def __init__(self, *tests: PushTest, name: str | None = None) -> None:
        self.tests = tests
        self._name = name or _joined("any_of", tests)

    @property
    def name(self) -> str:
        return self._name

    async def evaluate(self, ctx: PushContext) -> bool:
        for test in self.tests:
            if await test.evaluate(ctx):
                return True
        return False


class Not(PushTest):
    """Inverts its operand."""

    def __init__(self, test: PushTest, name: str | None = None) -> None:
        self.test = test
        self._name = name or f"not({test.name})"

    @property
    def name(self) -> str:
        return self._name

    async def evaluate(self, ctx: PushContext) -> bool:
        return not await self.test.evaluate(ctx)


def all_of(*tests: PushTest, name: str | None = None) -> PushTest:
    return AllOf(*tests, name=name)


def any_of(*tests: PushTest, name: str | None = None) -> PushTest:
    return AnyOf(*tests, name=name)


def not_(test: PushTest, name: str | None = None) -> PushTest:
    return Not(test, name=name)


def combine(tests: tuple[PushTest, ...]) -> PushTest:
    """Collapse rule guards into one test (a single guard is used as-is)."""
    if len(tests) == 1:
        return tests[0]
    return AllOf(*tests)
