"""Feature modules loaded by the console."""
