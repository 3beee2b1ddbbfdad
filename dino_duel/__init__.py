# Dino Duel Source Package
"""
Dino Duel - Single-screen arcade duel.

Modules:
- core: Abstract interfaces for the game, agent environment, and renderer
- game: Simulation core (entities, collisions, clock, campaign) plus env and renderer
- utils: Configuration loading
"""
