"""Cross-cutting concerns: config, logging, errors, metrics, pagination."""
