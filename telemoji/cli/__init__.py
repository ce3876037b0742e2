"""
Command-Line Interface Layer.

Typer application, console formatting, and the reporter that logs export progress.
"""
