"""Core reader functionality: URL cleaning, providers and the pipeline."""
