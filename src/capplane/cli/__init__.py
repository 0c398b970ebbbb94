"""capplane command-line interface (Typer)."""
