"""studiobot: business chatbot backend."""

__version__ = "1.0.0"
