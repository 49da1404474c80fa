"""Infrastructure components: caching, persistence and transport."""
