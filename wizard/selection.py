# wizard/selection.py
from __future__ import annotations

from typing import List, Sequence

REGENERATE_HINT = "Deselect some to regenerate"


def toggle(selected: Sequence[str], label: str) -> List[str]:
    if label in selected:
        return [s for s in selected if s != label]
    return [*selected, label]


def all_selected(generated: Sequence[str], selected: Sequence[str]) -> bool:
    return len(generated) > 0 and all(label in selected for label in generated)


def toggle_all(generated: Sequence[str], selected: Sequence[str]) -> List[str]:
    """Select-all button: everything on, or everything off when it already is."""
    if all_selected(generated, selected):
        return []
    return list(generated)


def can_regenerate(generated: Sequence[str], selected: Sequence[str], loading: bool = False) -> bool:
    # with every label selected there is no free slot, so a regenerate would be a no-op
    return not loading and not all_selected(generated, selected)
