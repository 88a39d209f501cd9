"""Use cases: the flows the CLI drives."""
