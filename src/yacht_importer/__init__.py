# ABOUTME: Yacht listing importer package
# ABOUTME: Extracts yacht listings from broker websites with layered strategies and confidence scoring

__version__ = "0.1.0"
