"""Core package for song generation: lyrics, vocals, music and the final mix.

This package provides typed, testable modules that the CLI script imports.
Providers are injected, so the pipeline runs the same against Hugging Face
or in-memory fakes.
"""
