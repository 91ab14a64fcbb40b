"""Pool de conexiones PostgreSQL."""
