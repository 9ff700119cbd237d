"""Lambda handlers, routed through handlers.main."""
