"""Infrastructure layer: storage backends, object stores, auth and the API server."""
