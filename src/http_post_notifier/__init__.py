"""HTTP POST build notifier - sends CI build status messages to a chat endpoint."""

__version__ = "0.1.0"
