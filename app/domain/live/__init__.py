"""
Live streaming domain logic.

Includes:
- watch: Viewer watch sessions (resolution, registration, chat, telemetry).
- broadcast: Channel creation and going on/off air.
"""
