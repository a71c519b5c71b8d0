"""
Core validation engine: models, rule parsing, dispatch and checkers.
"""
