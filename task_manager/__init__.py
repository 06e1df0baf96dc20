"""Task manager service: user accounts and their tasks."""
