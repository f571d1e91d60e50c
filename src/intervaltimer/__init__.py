"""intervaltimer: a repeating interval-training countdown timer."""

__version__ = "0.1.0"
