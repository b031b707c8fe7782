"""WebSocket server publishing robot telemetry."""
