"""Protocol engine: signing, requests, sessions, pagination and uploads."""
