"""Benchmarking the engine across puzzle sets and strategy configurations."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import json
import logging
import os

from tqdm import tqdm

from ..core.grid import Grid
from ..engine import DeductionSolver, PropagationConfig, PRESETS

log = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single session."""
    puzzle_id: int
    puzzle_set: str
    config: str
    solved: bool
    consistent: bool
    time_seconds: float
    memory_bytes: int
    givens: int
    resolved: int
    passes: int
    strategies: Dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "puzzle_set": self.puzzle_set,
            "config": self.config,
            "solved": self.solved,
            "consistent": self.consistent,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "givens": self.givens,
            "resolved": self.resolved,
            "passes": self.passes,
            "strategies": dict(self.strategies),
            "error": self.error,
        }


class Benchmark:
    """
    Runs the engine on every puzzle under every strategy configuration.

    Comparing configurations shows which deductions a puzzle set needs:
    a puzzle solved under "full" but not under "singles" needs pairs,
    pointing or naked sets.
    """

    def __init__(
        self,
        puzzle_sets: Dict[str, List[Grid]],
        configs: Optional[Dict[str, PropagationConfig]] = None,
    ):
        """
        Initialize the benchmark.

        Args:
            puzzle_sets: Set name -> puzzles.
            configs: Config name -> configuration (default: all presets).
        """
        self.puzzle_sets = puzzle_sets
        self.configs = configs if configs is not None else dict(PRESETS)
        self.results: List[BenchmarkResult] = []

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        self.results = []
        total = sum(len(p) for p in self.puzzle_sets.values()) * len(self.configs)
        pbar = tqdm(total=total, desc="Benchmarking", disable=not show_progress)

        for set_name, puzzles in self.puzzle_sets.items():
            for puzzle_id, puzzle in enumerate(puzzles):
                for config_name, config in self.configs.items():
                    self.results.append(
                        self._run_single(puzzle, puzzle_id, set_name, config_name, config)
                    )
                    pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: Grid,
        puzzle_id: int,
        set_name: str,
        config_name: str,
        config: PropagationConfig,
    ) -> BenchmarkResult:
        """Run one configuration on one puzzle."""
        solver = DeductionSolver(config)
        _, stats = solver.solve(puzzle)
        if not stats.consistent:
            log.warning("%s #%d under %s: %s", set_name, puzzle_id, config_name, stats.error)

        return BenchmarkResult(
            puzzle_id=puzzle_id,
            puzzle_set=set_name,
            config=config_name,
            solved=stats.solved,
            consistent=stats.consistent,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            givens=stats.givens,
            resolved=stats.resolved,
            passes=stats.passes,
            strategies=stats.strategies,
            error=stats.error,
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary: Dict[str, Any] = {
            "total_puzzles": sum(len(p) for p in self.puzzle_sets.values()),
            "configs_tested": list(self.configs.keys()),
            "puzzle_sets": list(self.puzzle_sets.keys()),
            "results_by_config": {},
            "results_by_set": {},
        }

        for config_name in self.configs:
            runs = [r for r in self.results if r.config == config_name]
            if runs:
                summary["results_by_config"][config_name] = _aggregate(runs)

        for set_name in self.puzzle_sets:
            set_runs = [r for r in self.results if r.puzzle_set == set_name]
            if not set_runs:
                continue
            summary["results_by_set"][set_name] = {
                config_name: _aggregate([r for r in set_runs if r.config == config_name])
                for config_name in self.configs
                if any(r.config == config_name for r in set_runs)
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save raw results and the summary as JSON."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        log.info("Results saved to %s", output_dir)


def _aggregate(runs: List[BenchmarkResult]) -> Dict[str, Any]:
    solved = [r for r in runs if r.solved]
    times = [r.time_seconds for r in runs]
    strategy_totals: Dict[str, int] = {}
    for r in runs:
        for name, count in r.strategies.items():
            strategy_totals[name] = strategy_totals.get(name, 0) + count

    return {
        "solve_rate": len(solved) / len(runs) * 100,
        "total_solved": len(solved),
        "total_tested": len(runs),
        "contradictions": sum(1 for r in runs if not r.consistent),
        "avg_time_seconds": sum(times) / len(times),
        "max_time_seconds": max(times),
        "avg_resolved": sum(r.resolved for r in runs) / len(runs),
        "strategies": strategy_totals,
    }
