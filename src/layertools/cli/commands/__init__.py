"""Top-level layertools commands (auto-discovered by the dispatcher)."""
