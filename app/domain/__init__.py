"""
Domain layer containing core business logic and domain services.

Submodules:
- auth: Broadcaster sign-in context.
- live: Live streaming domain logic (watch sessions, broadcasting).
- utils: Domain-specific utilities (ID generation, clock).
"""
