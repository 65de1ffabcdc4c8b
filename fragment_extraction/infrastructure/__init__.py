"""Infrastructure layer: adapters de texto, parsers, storage, modelos y prompts."""
