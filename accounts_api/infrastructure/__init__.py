"""Infraestructura: pool DB, colas y repositorios."""
