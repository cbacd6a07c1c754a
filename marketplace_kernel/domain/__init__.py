"""Pure domain layer: clock, DTOs, transfer stages, deposit policy.  Zero I/O."""
