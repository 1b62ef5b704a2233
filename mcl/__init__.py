"""mcl - release installer and launch-script generator."""

__version__ = "0.1.0"
