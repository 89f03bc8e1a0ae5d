"""project-manager: a personal registry of local project directories."""

__version__ = "0.2.0"
