"""Roll up Feature estimates into a release work item on Azure DevOps Boards."""

__version__ = "0.1.0"
