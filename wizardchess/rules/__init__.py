"""Rules package: board primitives, generators, beam tracing and mutators."""
