"""Bearer-token authentication and route authorization."""
