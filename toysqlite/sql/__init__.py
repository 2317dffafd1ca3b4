"""SQL front end: currently only the tokenizer."""
