"""dbtck command-line interface."""
