"""Static site generator for Markdown books."""
