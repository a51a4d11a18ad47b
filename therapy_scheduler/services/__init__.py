"""Application services orchestrating the scheduling core."""
