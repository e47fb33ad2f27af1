"""
Portfolio construction via Monte Carlo sampling of weight vectors.

Explores a risk/return frontier and selects min-volatility and max-Sharpe
portfolios.
"""
