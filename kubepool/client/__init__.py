"""Resource store clients."""
