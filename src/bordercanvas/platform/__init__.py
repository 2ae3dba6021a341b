"""Host platform pieces: the surface registry and display backends."""
