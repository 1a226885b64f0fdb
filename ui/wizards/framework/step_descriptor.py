# -*- coding: utf-8 -*-
"""
Step descriptors - declarative wizard steps resolved by index.

A wizard is an ordered list of descriptors. Each one names its title,
how to validate the draft for that step, how to render the step's data
on a review screen, and which step index an "edit" from review jumps to.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional


@dataclass
class StepValidationResult:
    """Result of step validation."""
    step_index: int
    is_valid: bool
    errors: List[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        return " | ".join(self.errors)


@dataclass(frozen=True)
class ReviewLine:
    """One label/value row of the review screen."""
    label: str
    value: str
    edit_target: int


@dataclass(frozen=True)
class StepDescriptor:
    """
    One wizard step.

    Attributes:
        key: stable identifier
        title_key: translation key of the step title
        validator: draft -> list of error messages (empty when valid)
        render: draft -> review lines for this step's data
        edit_target: step index that owns this step's fields
    """
    key: str
    title_key: str
    validator: Callable[[Any], List[str]]
    render: Optional[Callable[[Any], List[ReviewLine]]] = None
    edit_target: Optional[int] = None

    def validate(self, index: int, draft) -> StepValidationResult:
        errors = list(self.validator(draft))
        return StepValidationResult(step_index=index, is_valid=not errors, errors=errors)

    def review_lines(self, draft) -> List[ReviewLine]:
        if self.render is None:
            return []
        return self.render(draft)
