"""Core domain types shared by validation, ingestion and reporting."""
