"""
Backtest engine for relative-value opportunity rules.

Filters opportunities by a strategy rule, simulates realized trade outcomes,
and produces equity curves, trade logs, and summary statistics.
"""
