"""
Risk/performance metrics, yield-curve scenarios, screening, and synthetic data.

Includes computations for Sharpe ratio, drawdown, win/loss ratio, curve stress
shifts, and generators for simulated opportunities and market internals.
"""
