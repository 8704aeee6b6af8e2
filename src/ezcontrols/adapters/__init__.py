"""Host adapters that translate framework events into ezcontrols dispatch."""
