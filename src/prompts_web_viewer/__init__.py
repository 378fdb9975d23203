"""Browsable, searchable knowledge base over a folder of markdown prompts."""
