"""Domain layer: models, exceptions and page parsers."""
