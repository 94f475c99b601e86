"""task-tracker: a command-line task list stored in a single JSON file."""

__version__ = "1.0.0"
