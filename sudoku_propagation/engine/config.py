"""Settings controlling which deductions the engine applies."""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class PropagationConfig:
    """
    Which strategies a Board runs, and its convergence guard.

    Forced values (a cell left with one candidate) are always applied; they
    are what keeps candidate sets consistent with placed digits.
    """
    hidden_singles: bool = True
    hidden_pairs: bool = True
    pointing: bool = True
    naked_sets: bool = True

    # Upper bound on work-list steps for one top-level mutation. A full
    # solve needs a few thousand; hitting this means propagation is cycling.
    max_steps: int = 100_000

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def preset(cls, name: str) -> PropagationConfig:
        """Look up one of the named configurations in PRESETS."""
        try:
            return PRESETS[name]
        except KeyError:
            raise ValueError(
                f"Unknown configuration {name!r}, expected one of {sorted(PRESETS)}"
            ) from None


PRESETS: Dict[str, PropagationConfig] = {
    "full": PropagationConfig(),
    "singles": PropagationConfig(hidden_pairs=False, pointing=False, naked_sets=False),
    "no_naked_sets": PropagationConfig(naked_sets=False),
}
