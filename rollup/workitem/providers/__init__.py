"""WorkItem provider implementations."""
