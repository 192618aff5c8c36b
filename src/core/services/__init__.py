"""Servicios del Core: decisión de publicación y orquestación del workflow."""
