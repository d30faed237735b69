"""Core building blocks: glob compilation, storage and traversal."""
