"""Casos de uso del pipeline."""

from .process_document import ExtractionOrchestrator

__all__ = ["ExtractionOrchestrator"]
