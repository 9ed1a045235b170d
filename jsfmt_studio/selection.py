"""Confirmation flow for switching the language selector.

Changing the language while the editor holds text asks the user first.
The flow is a tagged state: Idle -> AwaitingConfirmation -> Applied or
Cancelled, then back to Idle via `reset`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .dialects import Dialect, coerce_dialect


class SelectionStateError(RuntimeError):
    pass


@dataclass(frozen=True)
class Idle:
    current: Dialect


@dataclass(frozen=True)
class AwaitingConfirmation:
    current: Dialect
    pending: Dialect


@dataclass(frozen=True)
class Applied:
    current: Dialect


@dataclass(frozen=True)
class Cancelled:
    current: Dialect


SelectionState = Union[Idle, AwaitingConfirmation, Applied, Cancelled]


class LanguageSelection:
    def __init__(self, current: Dialect = Dialect.AUTO):
        self.state: SelectionState = Idle(coerce_dialect(current))

    @property
    def current(self) -> Dialect:
        return self.state.current

    def request(self, requested, has_input: bool) -> SelectionState:
        requested = coerce_dialect(requested)
        current = self.state.current
        if requested == current or not has_input:
            self.state = Applied(requested)
        else:
            # Re-selecting while a confirmation is open replaces the pending choice.
            self.state = AwaitingConfirmation(current=current, pending=requested)
        return self.state

    def confirm(self) -> SelectionState:
        if not isinstance(self.state, AwaitingConfirmation):
            raise SelectionStateError("No language change is awaiting confirmation.")
        self.state = Applied(self.state.pending)
        return self.state

    def cancel(self) -> SelectionState:
        if not isinstance(self.state, AwaitingConfirmation):
            raise SelectionStateError("No language change is awaiting confirmation.")
        self.state = Cancelled(self.state.current)
        return self.state

    def adopt(self, dialect) -> SelectionState:
        """Take a dialect chosen outside the flow (e.g. by a file extension)."""
        self.state = Idle(coerce_dialect(dialect))
        return self.state

    def reset(self) -> SelectionState:
        self.state = Idle(self.state.current)
        return self.state
