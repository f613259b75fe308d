"""
commerce_scoring.reporting — ASCII formatting of envelopes for the Typer CLI.

Modules:
  formatters — Product tables, analysis and forecast blocks, health report.
"""
