"""Use-case layer: proxy logic decoupled from the HTTP transport."""
