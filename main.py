"""
relval_lab – Main entry point.

Minimal bootstrap script: runs the relative-value analysis with a fixed seed.
"""

from actions.run_relative_value_analysis import main as run_analysis


def main() -> None:
    """Run the demo analysis with a reproducible seed."""
    run_analysis(["--seed", "42"])


if __name__ == "__main__":
    main()
