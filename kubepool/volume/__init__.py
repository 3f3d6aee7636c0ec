"""Volume listing and description."""
