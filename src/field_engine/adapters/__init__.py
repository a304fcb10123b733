"""Host adapters (Textual)."""
