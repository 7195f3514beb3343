"""
Interactive plan selection.
"""

from typing import Callable, List, Optional, Tuple

from planswitch.core.plans.catalog import PlanCatalog


CURRENT_LABEL = "(current)"


def _pending_suffix(until: Optional[str]) -> str:
    # "3 days" -> " for 3 more days"
    if not until:
        return ""
    parts = until.split(" ", 1)
    if len(parts) == 2:
        return f" for {parts[0]} more {parts[1]}"
    return f" for {until}"


def build_choices(current_id: Optional[str], until: Optional[str] = None) -> List[Tuple[str, str]]:
    """
    Build (plan_id, label) pairs for the selection list.

    The active plan is annotated with "(current)". An id outside the catalog
    marks the base tier as current.
    """
    if not PlanCatalog.get(current_id or ""):
        current_id = PlanCatalog.base_plan().id.value

    choices = []
    for plan in PlanCatalog.list_all():
        label = f"{plan.name} {plan.price_label}"
        if plan.id.value == current_id:
            label = f"{label}  {CURRENT_LABEL}{_pending_suffix(until)}"
        choices.append((plan.id.value, label))
    return choices


class SelectionPrompter:
    """Numbered-list picker over stdin/stdout."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self._input = input_fn
        self._output = output_fn

    def select(self, message: str, current_id: Optional[str], until: Optional[str] = None) -> Optional[str]:
        """
        Ask the user to pick a plan.

        Returns:
            Chosen plan id, or None when the user aborts (empty answer,
            EOF or Ctrl-C)
        """
        choices = build_choices(current_id, until)
        self._output(message)
        for index, (_, label) in enumerate(choices, start=1):
            self._output(f"  {index}) {label}")

        while True:
            try:
                answer = self._input("> ").strip()
            except (EOFError, KeyboardInterrupt):
                return None

            if not answer:
                return None
            if answer.isdecimal() and 1 <= int(answer) <= len(choices):
                return choices[int(answer) - 1][0]
            for plan_id, _ in choices:
                if answer == plan_id:
                    return plan_id
            self._output(f"Please enter a number between 1 and {len(choices)}, or press Enter to cancel")
