"""Dependency solver service.

This module exports the solver interface and its testsolv implementation.
"""

from ostatus.solver.base import DependencySolver, SolverResult, TransactionStep, TransactionType
from ostatus.solver.testsolv import TestsolvSolver, parse_result

__all__ = [
    "DependencySolver",
    "SolverResult",
    "TestsolvSolver",
    "TransactionStep",
    "TransactionType",
    "parse_result",
]
