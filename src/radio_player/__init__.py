"""Radio Player - internet radio stations with a terminal player and HTTP catalog."""

__version__ = "0.1.0"
