"""
Strategy rules that decide which opportunities a backtest trades.

Defines the opportunity-filter protocol and the Balanced/Custom rules.
"""
