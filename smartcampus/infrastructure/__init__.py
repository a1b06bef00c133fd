"""Infrastructure layer: Firebase REST adapters, token verification, notifications."""
