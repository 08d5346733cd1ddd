"""Benchmark module: puzzle files, batch runs and charts."""

from .benchmark import Benchmark, BenchmarkResult
from .puzzles import load_puzzles, save_puzzles

__all__ = ["Benchmark", "BenchmarkResult", "load_puzzles", "save_puzzles"]
