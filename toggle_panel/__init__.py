"""
Toggle-panel optimizer.

Computes minimum button-press counts for panels of toggle lights
(breadth-first search) and for per-channel joltage targets (integer
program, with an A* search kept for cross-validation).
"""
