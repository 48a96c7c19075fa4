"""Promptcraft: rule-based prompt optimization."""

from promptcraft.config import Config
from promptcraft.intelligence import Mode, OptimizationResult, PromptOptimizer

__version__ = "0.1.0"

__all__ = ["Config", "Mode", "OptimizationResult", "PromptOptimizer", "__version__"]
