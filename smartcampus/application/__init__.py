"""Application layer: DTOs, ports, and the lifecycle services.

Depends on the domain only; infrastructure is injected through the ports.
"""
