"""Core modules for mindcontext."""
