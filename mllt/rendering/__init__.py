"""Page rendering and output writing."""
