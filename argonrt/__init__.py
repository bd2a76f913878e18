"""Value model, operators and built-in library of the Argon scripting language."""

__version__ = "3.0.0"