"""Charts and tables for benchmark results."""

from __future__ import annotations
import os
from typing import List

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult
from ..engine.session import STRATEGY_NAMES


class Visualizer:
    """
    Chart generator for engine benchmark results.

    Compares strategy configurations on solve rate, time and how often each
    deduction fired.
    """

    COLORS = {
        "full": "#2ecc71",          # Green
        "no_naked_sets": "#3498db", # Blue
        "singles": "#e74c3c",       # Red
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_solve_rate(),
            self.plot_time_comparison(),
            self.plot_strategy_usage(),
        ]

    def _configs(self) -> List[str]:
        return sorted(set(r.config for r in self.results))

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def plot_solve_rate(self) -> str:
        """Grouped bar chart of solve rate per puzzle set and configuration."""
        fig, ax = plt.subplots(figsize=(12, 6))

        configs = self._configs()
        sets = sorted(set(r.puzzle_set for r in self.results))
        x = np.arange(len(sets))
        width = 0.8 / len(configs)

        for i, config in enumerate(configs):
            rates = []
            for set_name in sets:
                runs = [r for r in self.results if r.config == config and r.puzzle_set == set_name]
                solved = sum(1 for r in runs if r.solved)
                rates.append(solved / len(runs) * 100 if runs else 0)

            offset = (i - len(configs) / 2 + 0.5) * width
            bars = ax.bar(x + offset, rates, width,
                          label=config,
                          color=self.COLORS.get(config, "#95a5a6"),
                          edgecolor='black', linewidth=0.5)
            for bar, rate in zip(bars, rates):
                if bar.get_height() > 0:
                    ax.annotate(f'{rate:.0f}%',
                                xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                                xytext=(0, 3),
                                textcoords="offset points",
                                ha='center', va='bottom', fontsize=8)

        ax.set_xlabel('Puzzle set', fontsize=12)
        ax.set_ylabel('Solved by deduction (%)', fontsize=12)
        ax.set_title('Solve Rate by Configuration', fontsize=14, fontweight='bold')
        ax.set_xticks(x)
        ax.set_xticklabels(sets)
        ax.legend(title='Configuration', bbox_to_anchor=(1.05, 1), loc='upper left')
        ax.set_ylim(0, 115)
        ax.axhline(y=100, color='gray', linestyle='--', alpha=0.3)

        return self._save("solve_rate.png")

    def plot_time_comparison(self) -> str:
        """Bar chart of average session time per configuration."""
        fig, ax = plt.subplots(figsize=(10, 6))

        configs = self._configs()
        avg_times = [
            np.mean([r.time_seconds for r in self.results if r.config == config])
            for config in configs
        ]
        colors = [self.COLORS.get(config, "#95a5a6") for config in configs]

        bars = ax.bar(configs, avg_times, color=colors, edgecolor='black', linewidth=0.5)
        for bar, t in zip(bars, avg_times):
            ax.annotate(f'{t:.4f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Configuration', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Session Time by Configuration', fontsize=14, fontweight='bold')
        ax.set_ylim(bottom=0)

        return self._save("time_comparison.png")

    def plot_strategy_usage(self) -> str:
        """Heatmap of average firings per puzzle, strategy by configuration."""
        fig, ax = plt.subplots(figsize=(10, 5))

        configs = self._configs()
        usage = np.zeros((len(STRATEGY_NAMES), len(configs)))
        for j, config in enumerate(configs):
            runs = [r for r in self.results if r.config == config]
            for i, name in enumerate(STRATEGY_NAMES):
                usage[i, j] = np.mean([r.strategies.get(name, 0) for r in runs])

        sns.heatmap(usage, annot=True, fmt=".1f", cmap="YlGn",
                    xticklabels=configs, yticklabels=STRATEGY_NAMES, ax=ax)
        ax.set_xlabel('Configuration', fontsize=12)
        ax.set_title('Average Strategy Firings per Puzzle', fontsize=14, fontweight='bold')

        return self._save("strategy_usage.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Configuration | Solved | Contradictions | Avg Time | Avg Resolved |",
            "|---------------|--------|----------------|----------|--------------|",
        ]

        for config in self._configs():
            runs = [r for r in self.results if r.config == config]
            solved = sum(1 for r in runs if r.solved)
            rate = solved / len(runs) * 100 if runs else 0
            contradictions = sum(1 for r in runs if not r.consistent)
            avg_time = np.mean([r.time_seconds for r in runs])
            avg_resolved = np.mean([r.resolved for r in runs])

            lines.append(
                f"| {config} | {rate:.1f}% | {contradictions} | {avg_time:.4f}s | {avg_resolved:.1f} |"
            )

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write("\n".join(lines))

        return path
