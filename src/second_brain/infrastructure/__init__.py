"""Infrastructure layer: storage and third-party API clients."""
