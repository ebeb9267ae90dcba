"""Game building blocks: geometry, collision, loot tables, dungeon graphs and layout, and animation timing."""

__version__ = "0.1.0"