"""TextPad HTTP application layer."""
