"""Client handle for the remote Ollama server."""
