"""Drawing primitives: protocols, colors, paths, coverage masks and the 2D context."""
