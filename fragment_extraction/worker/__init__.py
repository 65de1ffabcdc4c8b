"""Worker RQ: análisis asíncrono de documentos con entrega por callback."""
