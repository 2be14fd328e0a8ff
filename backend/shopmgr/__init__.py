"""Shop Manager scheduling core."""
