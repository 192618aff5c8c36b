"""Adaptadores concretos: registry (httpx), dotnet, git y outputs de Actions."""
