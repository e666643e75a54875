"""Declarative tmux session provisioning from YAML layout documents."""

__version__ = "0.1.0"
