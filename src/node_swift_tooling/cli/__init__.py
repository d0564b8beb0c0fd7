"""node-swift command line."""
