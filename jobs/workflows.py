"""
Job Workflows - State Machine Definitions for Jobs and Applications

Two small state machines drive the marketplace:

- Job:         open -> in_progress -> awaiting_completion -> completed,
               with open -> cancelled as the only exit from open.
- Application: pending -> accepted | rejected.

Every status write in jobs.services goes through ``WorkflowEngine.assert_transition``.
Moving backwards, skipping a state or leaving a terminal state is rejected
with ResourceStateError.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from api.exceptions import ResourceStateError

from .models import Job, JobApplication


@dataclass(frozen=True)
class WorkflowState:
    """A state with its display metadata."""

    name: str
    display_name: str
    is_initial: bool = False
    is_terminal: bool = False


@dataclass(frozen=True)
class WorkflowTransition:
    """A valid move between two states and the role allowed to make it."""

    from_state: str
    to_state: str
    name: str
    actor: str


class WorkflowEngine:
    """
    Transition table for one entity type.

    Usage:
        JOB_WORKFLOW.assert_transition(job.status, Job.Status.IN_PROGRESS)
    """

    def __init__(self, name: str):
        self.name = name
        self.states: Dict[str, WorkflowState] = {}
        self.transitions: Dict[str, List[WorkflowTransition]] = {}

    def add_state(self, state: WorkflowState) -> None:
        self.states[state.name] = state
        self.transitions.setdefault(state.name, [])

    def add_transition(self, transition: WorkflowTransition) -> None:
        self.transitions.setdefault(transition.from_state, []).append(transition)

    def get_initial_state(self) -> Optional[WorkflowState]:
        for state in self.states.values():
            if state.is_initial:
                return state
        return None

    def get_terminal_states(self) -> List[WorkflowState]:
        return [s for s in self.states.values() if s.is_terminal]

    def get_available_transitions(self, current_state: str) -> List[WorkflowTransition]:
        return self.transitions.get(current_state, [])

    def get_transition(self, from_state: str, to_state: str) -> Optional[WorkflowTransition]:
        for transition in self.get_available_transitions(from_state):
            if transition.to_state == to_state:
                return transition
        return None

    def can_transition(self, from_state: str, to_state: str) -> bool:
        return self.get_transition(from_state, to_state) is not None

    def required_state(self, to_state: str) -> Optional[str]:
        """The single state ``to_state`` can be reached from, if there is exactly one."""
        sources = [
            t.from_state
            for transitions in self.transitions.values()
            for t in transitions
            if t.to_state == to_state
        ]
        return sources[0] if len(sources) == 1 else None

    def assert_transition(self, from_state: str, to_state: str) -> WorkflowTransition:
        transition = self.get_transition(from_state, to_state)
        if transition is None:
            raise ResourceStateError(
                current_state=from_state,
                required_state=self.required_state(to_state),
                detail=f"{self.name} cannot move from '{from_state}' to '{to_state}'.",
            )
        return transition


# ==================== JOB WORKFLOW ====================

def create_job_workflow() -> WorkflowEngine:
    workflow = WorkflowEngine("Job")
    S = Job.Status

    workflow.add_state(WorkflowState(S.OPEN, "Open", is_initial=True))
    workflow.add_state(WorkflowState(S.IN_PROGRESS, "In progress"))
    workflow.add_state(WorkflowState(S.AWAITING_COMPLETION, "Awaiting completion"))
    workflow.add_state(WorkflowState(S.COMPLETED, "Completed", is_terminal=True))
    workflow.add_state(WorkflowState(S.CANCELLED, "Cancelled", is_terminal=True))

    workflow.add_transition(WorkflowTransition(S.OPEN, S.IN_PROGRESS, 'accept_application', actor='client'))
    workflow.add_transition(WorkflowTransition(S.IN_PROGRESS, S.AWAITING_COMPLETION, 'mark_work_done', actor='client'))
    workflow.add_transition(WorkflowTransition(S.AWAITING_COMPLETION, S.COMPLETED, 'confirm_payment', actor='labour'))
    workflow.add_transition(WorkflowTransition(S.OPEN, S.CANCELLED, 'cancel', actor='client'))
    return workflow


# ==================== APPLICATION WORKFLOW ====================

def create_application_workflow() -> WorkflowEngine:
    workflow = WorkflowEngine("Application")
    S = JobApplication.Status

    workflow.add_state(WorkflowState(S.PENDING, "Pending", is_initial=True))
    workflow.add_state(WorkflowState(S.ACCEPTED, "Accepted", is_terminal=True))
    workflow.add_state(WorkflowState(S.REJECTED, "Rejected", is_terminal=True))

    workflow.add_transition(WorkflowTransition(S.PENDING, S.ACCEPTED, 'accept', actor='client'))
    workflow.add_transition(WorkflowTransition(S.PENDING, S.REJECTED, 'reject', actor='client'))
    return workflow


JOB_WORKFLOW = create_job_workflow()
APPLICATION_WORKFLOW = create_application_workflow()
