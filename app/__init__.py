"""Walking app activity feed: HTTP API, persistence and live client."""
