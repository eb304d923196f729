"""domsnap command-line interface."""
