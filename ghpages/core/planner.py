"""Tree establishment plan.

How the working tree is built depends on three booleans: whether history is
kept, whether several sites share the branch, and whether the branch already
exists on the remote. Every combination is spelled out below.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TreePlan:
    """What to do with the working tree for one combination of modes.

    Attributes:
        clone: Start from a clone of the existing branch (else init + orphan)
        isolate: Empty the build's top-level directories before copying
        force_push: Overwrite the remote branch instead of fast-forwarding
    """

    clone: bool
    isolate: bool
    force_push: bool

    @property
    def check_dirty(self) -> bool:
        """A cloned tree with no modifications has nothing to deploy."""
        return self.clone


# (keep_history, multiple_sites, branch_exists) -> plan
DECISION_TABLE: dict[tuple[bool, bool, bool], TreePlan] = {
    (False, False, False): TreePlan(clone=False, isolate=False, force_push=True),
    (False, False, True): TreePlan(clone=False, isolate=False, force_push=True),
    # Other sites live in sibling directories: keep the existing tree
    (False, True, False): TreePlan(clone=False, isolate=True, force_push=True),
    (False, True, True): TreePlan(clone=True, isolate=True, force_push=True),
    (True, False, False): TreePlan(clone=False, isolate=False, force_push=False),
    (True, False, True): TreePlan(clone=True, isolate=False, force_push=False),
    (True, True, False): TreePlan(clone=False, isolate=False, force_push=False),
    (True, True, True): TreePlan(clone=True, isolate=False, force_push=False),
}


def plan_tree(keep_history: bool, multiple_sites: bool, branch_exists: bool) -> TreePlan:
    """Look up the plan for a combination of modes."""
    return DECISION_TABLE[(keep_history, multiple_sites, branch_exists)]
