"""
Configuration tests for Bank Sequences.
"""
