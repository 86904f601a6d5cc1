"""Reading the legacy STAF text format: section tokenizer and field tables."""
