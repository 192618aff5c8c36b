"""Core: configuración, dominio, contratos y servicios del flujo de publicación."""
