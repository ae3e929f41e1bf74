"""Graph Tool Backend - REST and WebSocket surface over the graph engine."""
