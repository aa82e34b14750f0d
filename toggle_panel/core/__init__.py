"""
Core panel model, bit helpers, error taxonomy and text IO.
"""
