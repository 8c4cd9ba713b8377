"""Core runtime context and option catalog for roachcli."""
