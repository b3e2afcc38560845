"""Command-line interface: click commands, terminal output, structured event log."""
