"""HTTP surface over a single explorer session."""
