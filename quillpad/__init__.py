"""quillpad: text encoding and search/replace core of a small text editor."""
