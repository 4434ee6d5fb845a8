"""Repository layer: DAOs built on StatementExecutor.

Keep functions thin and focused, so callers avoid SQL strings.
"""
