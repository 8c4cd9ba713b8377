"""Command groups, flag binding and the command-line entry point."""
