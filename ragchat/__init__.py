"""RAG chat over a portfolio of project documents."""

__version__ = "1.0.0"
