"""Collection scanning and assembly."""
