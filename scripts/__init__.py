"""MongoDB maintenance scripts."""
