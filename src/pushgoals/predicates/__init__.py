"""Push test package -- predicates over a push and their combinators."""

from pushgoals.predicates.protocols import PredicatePushTest, PushTest, push_test
from pushgoals.predicates.combinators import AllOf, AnyOf, Not, all_of, any_of, not_
from pushgoals.predicates.evaluation import Evaluation
from pushgoals.predicates.builtin import (
    AnyPush,
    HasCloudFoundryManifest,
    HasCustomBuildScript,
    HasDockerfile,
    HasPackageLock,
    HasProcfile,
    IsDeployEnabled,
    IsDeploymentFrozen,
    IsJvm,
    IsMaven,
    IsNode,
    IsSpringBoot,
    MaterialChangeToJavaRepo,
    MaterialChangeToNodeRepo,
    ToDefaultBranch,
    ToPublicRepo,
    from_author,
    has_file,
    has_file_containing,
    material_change,
    to_branch,
)

__all__ = [
    "PushTest",
    "PredicatePushTest",
    "push_test",
    "AllOf",
    "AnyOf",
    "Not",
    "all_of",
    "any_of",
    "not_",
    "Evaluation",
    "AnyPush",
    "HasCloudFoundryManifest",
    "HasCustomBuildScript",
    "HasDockerfile",
    "HasPackageLock",
    "HasProcfile",
    "IsDeployEnabled",
    "IsDeploymentFrozen",
    "IsJvm",
    "IsMaven",
    "IsNode",
    "IsSpringBoot",
    "MaterialChangeToJavaRepo",
    "MaterialChangeToNodeRepo",
    "ToDefaultBranch",
    "ToPublicRepo",
    "from_author",
    "has_file",
    "has_file_containing",
    "material_change",
    "to_branch",
]
