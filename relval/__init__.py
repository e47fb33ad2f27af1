"""
relval – analytics core for fixed-income relative-value trade evaluation.

Backtests opportunity filters, stress-tests yield curves under named scenarios,
and samples a Monte Carlo risk/return frontier over candidate bonds.
"""

from loguru import logger

# Silent as a library until configure_logging() opts in
logger.disable("relval")
