"""Runtime services shared by the library (logging, profiling)."""
