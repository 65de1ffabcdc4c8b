"""
fragment_extraction: extracción por chunks de "fragments" (記憶のかけら)
desde documentos largos (txt / md / docx / pdf).

Capas:
  - domain: entidades + puertos
  - application: orquestador, ventana de dedup, reducción de outcomes
  - infrastructure: segmentador, parsers, storage, modelos, prompts
  - crosscutting: config, logging, métricas, excepciones
"""

__version__ = "0.1.0"
