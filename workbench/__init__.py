"""Workbench: task lifecycle tracking and planned-vs-actual time reporting."""

__version__ = "0.1.0"
