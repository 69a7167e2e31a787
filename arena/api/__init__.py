"""Network surface: WebSocket endpoint, session gateway, app factory."""
