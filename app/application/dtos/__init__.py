"""Application DTOs: plain dataclasses passed between layers (no ORM types)."""
