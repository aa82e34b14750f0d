"""
Per-panel orchestration, diagnostics records and the command-line runner.
"""
