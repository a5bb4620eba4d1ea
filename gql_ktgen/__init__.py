"""GraphQL schema augmentation and Kotlin SDK generation."""

__version__ = "0.1.0"
