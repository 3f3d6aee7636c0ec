"""cStor pool cluster generation."""
