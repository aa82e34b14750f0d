"""
Linear equality constraint plumbing for the joltage integer program.
"""
