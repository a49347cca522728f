"""Domain layer — the graph container and its strong-component engine.

This layer depends only on the stdlib.
It must never import from services, commands, config, or output.
"""
