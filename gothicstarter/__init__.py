"""Find Gothic modifications, prepare the installation for one and launch the game."""

__version__ = "2.8.0"