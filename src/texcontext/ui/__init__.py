"""User-facing front ends for texcontext."""
