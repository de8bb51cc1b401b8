"""Local HTTP/WebSocket bridge between the game and a browser renderer."""
