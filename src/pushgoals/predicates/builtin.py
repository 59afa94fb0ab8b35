"""Built-in push tests.

Branch and repository tests read only the PushContext; project tests go
through ``ctx.project`` and may perform I/O.
"""

from __future__ import annotations

import fnmatch
import logging
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from pushgoals.predicates.combinators import any_of
from pushgoals.predicates.protocols import PredicatePushTest, PushTest

if TYPE_CHECKING:
    from pushgoals.models.push import PushContext

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Push shape
# ------------------------------------------------------------------

AnyPush: PushTest = PredicatePushTest("any-push", lambda ctx: True)

ToDefaultBranch: PushTest = PredicatePushTest(
    "to-default-branch", lambda ctx: ctx.is_default_branch
)

ToPublicRepo: PushTest = PredicatePushTest(
    "to-public-repo", lambda ctx: not ctx.repo.private
)


def to_branch(pattern: str) -> PushTest:
    """Match pushes to branches matching a glob pattern (e.g. ``release/*``)."""
    return PredicatePushTest(
        f"to-branch:{pattern}",
        lambda ctx: fnmatch.fnmatchcase(ctx.branch, pattern),
    )


def from_author(*logins: str) -> PushTest:
    """Match pushes whose head commit was authored by one of *logins*."""
    wanted = frozenset(logins)
    return PredicatePushTest(
        f"from-author:{','.join(sorted(wanted))}",
        lambda ctx: ctx.author is not None and ctx.author in wanted,
    )


# ------------------------------------------------------------------
# Project content
# ------------------------------------------------------------------


def has_file(path: str) -> PushTest:
    """Match projects containing *path*."""

    async def _check(ctx: PushContext) -> bool:
        return await ctx.project.file_exists(path)

    return PredicatePushTest(f"has-file:{path}", _check)


def has_file_containing(path: str, pattern: str) -> PushTest:
    """Match projects where *path* exists and its content matches a regex."""
    regex = re.compile(pattern)

    async def _check(ctx: PushContext) -> bool:
        content = await ctx.project.get_content(path)
        return content is not None and regex.search(content) is not None

    return PredicatePushTest(f"has-file-containing:{path}:{pattern}", _check)


IsMaven = has_file("pom.xml")
IsNode = has_file("package.json")
IsSpringBoot = has_file_containing("pom.xml", r"spring-boot")
HasCloudFoundryManifest = has_file("manifest.yml")
HasDockerfile = has_file("Dockerfile")
HasProcfile = has_file("Procfile")
HasPackageLock = has_file("package-lock.json")
HasCustomBuildScript = has_file(".pushgoals/build.sh")


# ------------------------------------------------------------------
# Changed files
# ------------------------------------------------------------------


def _is_material(
    path: str,
    extensions: frozenset[str],
    files: frozenset[str],
    directories: tuple[str, ...],
) -> bool:
    if path in files or path.rsplit("/", 1)[-1] in files:
        return True
    if any(path.endswith(ext) for ext in extensions):
        return True
    return any(path.startswith(d) for d in directories)


def material_change(
    *,
    extensions: Iterable[str] = (),
    files: Iterable[str] = (),
    directories: Iterable[str] = (),
    name: str | None = None,
) -> PushTest:
    """Match pushes that change at least one file of interest.

    A push whose changed-file set is unknown counts as a material change.
    """
    exts = frozenset(e if e.startswith(".") else f".{e}" for e in extensions)
    names = frozenset(files)
    dirs = tuple(d.rstrip("/") + "/" for d in directories)

    def _check(ctx: PushContext) -> bool:
        if ctx.files_changed is None:
            logger.debug(
                "No changed-file information for %s@%s, assuming material change",
                ctx.repo.slug,
                ctx.short_sha,
            )
            return True
        return any(_is_material(p, exts, names, dirs) for p in ctx.files_changed)

    return PredicatePushTest(name or "material-change", _check)


MaterialChangeToJavaRepo = material_change(
    extensions=("java", "kt", "properties", "yml"),
    files=("pom.xml", "Dockerfile"),
    name="material-change-to-java-repo",
)

MaterialChangeToNodeRepo = material_change(
    extensions=("js", "ts", "json", "html", "css"),
    files=("Dockerfile",),
    name="material-change-to-node-repo",
)

IsJvm = any_of(IsMaven, has_file("build.gradle"), name="is-jvm")


# ------------------------------------------------------------------
# Deployment status snapshot
# ------------------------------------------------------------------


def _is_frozen(ctx: PushContext) -> bool:
    frozen = ctx.deployment.frozen
    logger.debug(
        "Delivery frozen for %s@%s = %s", ctx.repo.slug, ctx.short_sha, frozen
    )
    return frozen


IsDeploymentFrozen: PushTest = PredicatePushTest("is-deployment-frozen", _is_frozen)

IsDeployEnabled: PushTest = PredicatePushTest(
    "is-deploy-enabled", lambda ctx: ctx.deployment.deploy_enabled
)
