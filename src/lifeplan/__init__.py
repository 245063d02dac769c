"""lifeplan: validation and constraint-normalization engine for a goal/habit planner."""

__version__ = "0.1.0"
