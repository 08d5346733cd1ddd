"""Solving sessions: run the engine on a puzzle and report what happened."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple
import logging
import time
import tracemalloc

from ..core.errors import InvalidStateError
from ..core.grid import Grid
from .board import Board
from .config import PropagationConfig

log = logging.getLogger(__name__)


@dataclass
class SessionStats:
    """Statistics from one solving session."""
    # Outcome
    solved: bool = False
    consistent: bool = True
    time_seconds: float = 0.0
    memory_bytes: int = 0

    # Progress
    givens: int = 0
    resolved: int = 0
    assignments: int = 0
    eliminations: int = 0
    passes: int = 0
    strategies: Dict[str, int] = field(default_factory=dict)

    # Failure details
    error: Optional[str] = None
    contradiction: Optional[Dict[str, Any]] = None

    algorithm: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "consistent": self.consistent,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "givens": self.givens,
            "resolved": self.resolved,
            "assignments": self.assignments,
            "eliminations": self.eliminations,
            "passes": self.passes,
            "strategies": dict(self.strategies),
            "error": self.error,
            "contradiction": self.contradiction,
            "algorithm": self.algorithm,
        }


STRATEGY_NAMES = (
    "naked_single",
    "hidden_single",
    "hidden_pair",
    "pointing_pair",
    "pointing_triple",
    "naked_set",
)


class DeductionSolver:
    """
    Solves as far as pure logic allows.

    Builds a Board from the puzzle, which places the givens and propagates
    to a fixpoint. Puzzles that need guessing come back partially filled
    with solved=False; puzzles with no solution come back as None with the
    contradiction recorded in the stats.
    """

    name = "Logical Deduction"

    def __init__(self, config: Optional[PropagationConfig] = None):
        self.config = config or PropagationConfig()
        self.board: Optional[Board] = None
        self.stats = SessionStats(algorithm=self.name)

    def solve(self, puzzle: Grid) -> Tuple[Optional[Grid], SessionStats]:
        """
        Propagate a puzzle with timing and memory tracking.

        Args:
            puzzle: The puzzle to solve.

        Returns:
            Tuple of (resulting grid or None on contradiction, stats).
        """
        self.stats = SessionStats(algorithm=self.name, givens=puzzle.count_filled())
        # Kept when a given contradicts, so the partial state can be reported
        self.board = Board(config=self.config)

        tracemalloc.start()
        start_time = time.perf_counter()

        result: Optional[Grid] = None
        try:
            self.board.place_givens(puzzle)
            result = self.board.to_grid()
        except InvalidStateError as e:
            self.stats.consistent = False
            self.stats.error = str(e)
            self.stats.contradiction = e.to_dict()

        self.stats.time_seconds = time.perf_counter() - start_time
        _, peak = tracemalloc.get_traced_memory()
        tracemalloc.stop()
        self.stats.memory_bytes = peak

        self._collect(result)
        log.info(
            "%s: %s, %d/81 cells resolved in %.4fs",
            self.name,
            "solved" if self.stats.solved else
            ("stuck" if self.stats.consistent else "contradiction"),
            self.stats.resolved,
            self.stats.time_seconds,
        )
        return result, self.stats

    def _collect(self, result: Optional[Grid]) -> None:
        if result is not None:
            self.stats.resolved = result.count_filled()
            self.stats.solved = result.is_solved()

        board = self.board
        if board is None:
            return
        tally = board.tally
        self.stats.assignments = tally["assignments"]
        self.stats.eliminations = tally["eliminations"]
        self.stats.passes = tally["passes"]
        self.stats.strategies = {name: tally[name] for name in STRATEGY_NAMES}

    def reset_stats(self) -> None:
        """Reset solver statistics."""
        self.stats = SessionStats(algorithm=self.name)
