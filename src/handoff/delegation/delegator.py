"""
Delegator — Fixed Workflow Chains and Hand-off Permissions

Two static tables:
    DELEGATION_CHAINS: task category -> ordered roles that handle it end to end
    HANDOFF_MATRIX:    role -> roles it may hand work to, regardless of category

The chain answers "who comes next"; the matrix answers "is this transfer
legitimate". They are consulted independently.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

from handoff.errors import NoNextAgentError, TaskValidationError
from handoff.models import AgentRole, Task, TaskType

logger = logging.getLogger(__name__)

DELEGATION_CHAINS: Final[Mapping[str, tuple[AgentRole, ...]]] = MappingProxyType(
    {
        TaskType.FEATURE: (
            AgentRole.ARCHITECT,
            AgentRole.SENIOR,
            AgentRole.DEVELOPER,
            AgentRole.REVIEWER,
        ),
        TaskType.BUG_FIX: (AgentRole.SENIOR, AgentRole.DEVELOPER, AgentRole.REVIEWER),
        TaskType.REFACTOR: (AgentRole.SENIOR, AgentRole.DEVELOPER, AgentRole.REVIEWER),
        TaskType.TEST: (AgentRole.DEVELOPER, AgentRole.REVIEWER),
        TaskType.DOCUMENTATION: (AgentRole.DEVELOPER,),
        TaskType.ARCHITECTURE: (AgentRole.ARCHITECT, AgentRole.SENIOR, AgentRole.REVIEWER),
    }
)

DEFAULT_CHAIN: Final[tuple[AgentRole, ...]] = (AgentRole.DEVELOPER,)

HANDOFF_MATRIX: Final[Mapping[str, frozenset[AgentRole]]] = MappingProxyType(
    {
        AgentRole.PRODUCT: frozenset(
            {AgentRole.ARCHITECT, AgentRole.SENIOR, AgentRole.DEVELOPER}
        ),
        AgentRole.ARCHITECT: frozenset({AgentRole.SENIOR, AgentRole.DEVELOPER}),
        AgentRole.SENIOR: frozenset({AgentRole.DEVELOPER, AgentRole.REVIEWER}),
        AgentRole.DEVELOPER: frozenset({AgentRole.REVIEWER}),
        AgentRole.REVIEWER: frozenset(),
        AgentRole.OPS: frozenset({AgentRole.SENIOR, AgentRole.DEVELOPER}),
    }
)


def can_hand_off(from_role: str, to_role: str) -> bool:
    """Whether from_role may transfer work to to_role. Unknown roles may not."""
    return to_role in HANDOFF_MATRIX.get(from_role, frozenset())


class Delegator:
    """Answers workflow questions for a task against the static chain table."""

    def __init__(
        self, chains: Mapping[str, tuple[AgentRole, ...]] = DELEGATION_CHAINS
    ) -> None:
        self._chains = chains

    def _validated(self, task: Task) -> Task:
        try:
            task.validate()
        except TaskValidationError as exc:
            raise TaskValidationError(f"invalid task: {exc}") from exc
        return task

    def delegation_chain(self, task: Task) -> list[AgentRole]:
        """Complete workflow chain for the task's category (a fresh list)."""
        self._validated(task)
        return list(self._chains.get(task.task_type, DEFAULT_CHAIN))

    def next_agent(self, task: Task, current: str) -> AgentRole:
        """
        Role that follows `current` in the task's chain.

        Raises:
            NoNextAgentError: current is the last role, or not in the chain
        """
        chain = self.delegation_chain(task)
        for index, role in enumerate(chain):
            if role == current and index + 1 < len(chain):
                following = chain[index + 1]
                logger.debug("Next agent after %s for %s: %s", current, task.task_type, following)
                return following

        raise NoNextAgentError(str(current), str(task.task_type))

    def should_delegate(self, task: Task, current: str) -> bool:
        """True if `current` takes part in the chain, last position included."""
        return current in self.delegation_chain(task)

    def can_hand_off(self, from_role: str, to_role: str) -> bool:
        return can_hand_off(from_role, to_role)
