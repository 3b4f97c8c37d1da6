"""
Formula evaluator tests.
"""
