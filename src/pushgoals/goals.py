"""Well-known delivery goals and stock goal sets.

Ordering inside a goal set is the only dependency mechanism: endpoint and
verification goals are declared after the deployment they check.
"""

from __future__ import annotations

from pushgoals.models.goal import Goal, GoalCategory, GoalSet

# Checks
ReviewGoal = Goal("review", GoalCategory.INSPECTION, "Review code")
CodeInspectionGoal = Goal("code-inspection", GoalCategory.INSPECTION, "Inspect code")
AutofixGoal = Goal("autofix", GoalCategory.INSPECTION, "Apply autofixes")
PushReactionGoal = Goal(
    "push-reaction", GoalCategory.INSPECTION, "React to push", required=False
)

# Build
BuildGoal = Goal("build", GoalCategory.BUILD, "Build")
ArtifactGoal = Goal("artifact", GoalCategory.ARTIFACT, "Store artifact")

# Deployment
LocalDeploymentGoal = Goal("local-deploy", GoalCategory.DEPLOY, "Deploy locally")
StagingDeploymentGoal = Goal("staging-deploy", GoalCategory.DEPLOY, "Deploy to staging")
StagingEndpointGoal = Goal("staging-endpoint", GoalCategory.DEPLOY, "Locate staging endpoint")
StagingVerifiedGoal = Goal("staging-verified", GoalCategory.VERIFY, "Verify staging deployment")
ProductionDeploymentGoal = Goal("production-deploy", GoalCategory.DEPLOY, "Deploy to production")
ProductionEndpointGoal = Goal(
    "production-endpoint", GoalCategory.DEPLOY, "Locate production endpoint"
)

# Disposal
StagingUndeploymentGoal = Goal("staging-undeploy", GoalCategory.DISPOSAL, "Undeploy from staging")
ProductionUndeploymentGoal = Goal(
    "production-undeploy", GoalCategory.DISPOSAL, "Undeploy from production"
)
DeleteRepositoryGoal = Goal("delete-repository", GoalCategory.DISPOSAL, "Delete repository")

# Notification
ExplainDeploymentFreezeGoal = Goal(
    "explain-deployment-freeze", GoalCategory.MESSAGE, "Explain deployment freeze"
)


NoGoals = GoalSet.empty("No goals")

CheckGoals = GoalSet.of("Checks", CodeInspectionGoal, PushReactionGoal, AutofixGoal)

ReviewOnlyGoals = GoalSet.of("Review only", ReviewGoal)

LibraryGoals = GoalSet.of("Library", ReviewGoal, AutofixGoal, BuildGoal, ArtifactGoal)

LocalDeploymentGoals = GoalSet.of(
    "Local deployment", ReviewGoal, AutofixGoal, BuildGoal, LocalDeploymentGoal
)

StagingDeploymentGoals = GoalSet.of(
    "Staging deployment",
    ArtifactGoal,
    StagingDeploymentGoal,
    StagingEndpointGoal,
    StagingVerifiedGoal,
)

ProductionDeploymentGoals = GoalSet.of(
    "Production deployment",
    ArtifactGoal,
    ProductionDeploymentGoal,
    ProductionEndpointGoal,
)

HttpServiceGoals = GoalSet(
    "HTTP service",
    (
        ReviewGoal,
        AutofixGoal,
        BuildGoal,
        *StagingDeploymentGoals,
        *ProductionDeploymentGoals,
    ),
)

UndeployEverywhereGoals = GoalSet.of(
    "Undeploy everywhere", StagingUndeploymentGoal, ProductionUndeploymentGoal
)

RepositoryDeletionGoals = GoalSet.of(
    "Repository deletion",
    StagingUndeploymentGoal,
    ProductionUndeploymentGoal,
    DeleteRepositoryGoal,
)

FrozenDeploymentGoals = GoalSet.of(
    "Deployment freeze",
    StagingDeploymentGoal,
    StagingEndpointGoal,
    StagingVerifiedGoal,
    ProductionDeploymentGoal,
    ProductionEndpointGoal,
)
