"""Domain layer - stations, playback and the session host."""
