"""Batch web page summarization: fetch, extract, trim, prompt, complete."""

__version__ = "0.1.0"
