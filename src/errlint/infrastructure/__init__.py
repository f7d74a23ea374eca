"""Infrastructure layer — host adapters that turn source files and
imported modules into domain declarations."""
