"""Crosscutting: configuración, logging, métricas y errores tipados."""
