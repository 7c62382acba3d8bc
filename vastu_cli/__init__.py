"""
Vastu CLI - Command-line interface for plan analysis.

This package provides a CLI for running the advisor on a plan configuration
and for inspecting the 32-zone table and deviation bands without writing code.

Usage:
    vastu-cli analyze config/plans/example_plan.yaml --output report.json
    vastu-cli zones --rotation 12.5
    vastu-cli classify -- -12.5
"""

__version__ = "1.0.0"
