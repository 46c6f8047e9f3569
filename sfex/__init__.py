"""Runtime values, operations and standard-library helpers for the SFX scripting language."""

__version__ = "0.3.3"