"""Interactive mathematical visualization: axes, grids, circles, sampled function graphs and a pygame viewer."""

__version__ = "0.1.0"