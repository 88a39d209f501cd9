"""Click front-end: interactive prompts and terminal output."""
