"""Agents package initialization"""

from .math_classifier import MathCategory, MathClassifier
from .symbolic_solvers import SolverMismatch, SolverSolution, solve_algebra, solve_integral
from .orchestrator import PipelineContext, QueryResolver, ResolutionResult, ResultSource
from .video_agent import VideoSummaryAgent

__all__ = [
    'MathCategory',
    'MathClassifier',
    'SolverMismatch',
    'SolverSolution',
    'solve_algebra',
    'solve_integral',
    'PipelineContext',
    'QueryResolver',
    'ResolutionResult',
    'ResultSource',
    'VideoSummaryAgent'
]
