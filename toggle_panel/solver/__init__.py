"""
Solvers for panel light patterns and joltage targets.

  - lights: breadth-first search over the toggle-state graph
  - joltage_ilp: exact integer program (PuLP / CBC backend)
  - joltage_astar: A* over per-channel count vectors, for cross-validation
"""
